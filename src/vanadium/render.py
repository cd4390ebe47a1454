"""
Text rendering of fetched documents.

render() strips markup and decodes a small set of character entities;
render_source() shows the raw document with line numbers.
"""

from typing import Tuple

ENTITIES = {
    "lt": "<",
    "gt": ">",
}


def read_entity(text: str) -> Tuple[str, int]:
    """
    Decode the entity at the start of text.

    Args:
        text: Text starting with '&'

    Returns:
        (output, consumed): the decoded character for a known entity,
        the literal '&name;' for an unknown one, or the whole of text
        when no ';' terminates it.
    """
    if not text.startswith("&"):
        raise ValueError("entity must start with '&'")

    end = text.find(";")
    if end == -1:
        return text, len(text)

    name = text[1:end]
    return ENTITIES.get(name, text[:end + 1]), end + 1


def render(body: str) -> str:
    """
    Render a document as text with its tags removed.

    Entities are decoded wherever they appear, including inside tags;
    every other character is kept only outside tags.
    """
    out = []
    in_tag = False
    i = 0

    while i < len(body):
        c = body[i]
        if c == "<":
            in_tag = True
        elif c == ">":
            in_tag = False
        elif c == "&":
            text, consumed = read_entity(body[i:])
            out.append(text)
            i += consumed
            continue
        elif not in_tag:
            out.append(c)
        i += 1

    return "".join(out)


def render_source(body: str) -> str:
    """Render a document verbatim, each line prefixed by its number."""
    lines = body.split("\n")
    if lines[-1] == "":
        lines.pop()

    out = []
    for number, line in enumerate(lines, start=1):
        if line.endswith("\r"):
            line = line[:-1]
        out.append(f"{number:>6} {line}\n")
    return "".join(out)
