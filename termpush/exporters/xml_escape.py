"""XML escaping shared by the XML-based exporters.

XML parsers normalize raw carriage returns in text, and tabs and line
breaks in attribute values, so those are written as character references.
"""

_TEXT = {'&': '&amp;', '<': '&lt;', '>': '&gt;', '\r': '&#13;'}
_ATTRIBUTE = {**_TEXT, '"': '&quot;', '\n': '&#10;', '\t': '&#9;'}


def escape_text(text: str) -> str:
    return ''.join(_TEXT.get(char, char) for char in text)


def escape_attribute(text: str) -> str:
    return ''.join(_ATTRIBUTE.get(char, char) for char in text)
