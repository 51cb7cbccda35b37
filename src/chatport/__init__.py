"""chatport — detect chat export formats and convert Markdown transcripts."""

__version__ = "0.1.0"
