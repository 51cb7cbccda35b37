"""Line handling shared by the detector and the Markdown parser."""

import re

# Only \n, \r\n and \r end a line; form feeds, U+2028 and friends stay in the text
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def split_lines(content: str) -> list[str]:
    return LINE_BREAK_RE.split(content)
