"""
Netscape bookmark file serialization for bkmerge.

Turns the grouped label -> URLs mapping into a browser-importable
bookmark document, one folder per label.
"""
import html
from pathlib import Path
from typing import Dict, List, Union

from bkmerge.constants import (
    DEFAULT_DOCUMENT_TITLE,
    DEFAULT_ENCODING,
    DEFAULT_HEADING,
    INDENT,
    NETSCAPE_DOCTYPE,
    NETSCAPE_META,
)


def render_html(groups: Dict[str, List[str]], escape: bool = True,
                title: str = DEFAULT_DOCUMENT_TITLE,
                heading: str = DEFAULT_HEADING) -> str:
    """
    Render grouped bookmarks as a Netscape bookmark document.

    Each label becomes a folder (<H3>) holding one link per URL. Every
    link is displayed with its folder's label rather than its own title.

    Args:
        groups: Ordered mapping of label to ordered URLs
        escape: HTML-escape labels and URLs. With escape=False values are
            inserted verbatim, and text containing markup characters can
            corrupt the document.
        title: Content of the <TITLE> element
        heading: Content of the top-level <H1> element

    Returns:
        The complete document text
    """
    quote = html.escape if escape else (lambda s: s)

    lines = [
        NETSCAPE_DOCTYPE,
        NETSCAPE_META,
        f'<TITLE>{quote(title)}</TITLE>',
        f'<H1>{quote(heading)}</H1>',
        '<DL><p>'
    ]

    for label, urls in groups.items():
        shown = quote(label)
        lines.append(f'{INDENT}<DT><H3>{shown}</H3>')
        lines.append(f'{INDENT}<DL><p>')
        for url in urls:
            lines.append(f'{INDENT * 2}<DT><A HREF="{quote(url)}">{shown}</A>')
        lines.append(f'{INDENT}</DL><p>')

    lines.append('</DL><p>')
    return "\n".join(lines) + "\n"


def export_file(document: str, path: Union[str, Path],
                encoding: str = DEFAULT_ENCODING) -> Path:
    """
    Write a serialized document to disk.

    Args:
        document: Document text, as returned by MergeStore.serialize()
        path: Output file path (parent directories are created)
        encoding: Output encoding

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding=encoding) as f:
        f.write(document)

    return path
