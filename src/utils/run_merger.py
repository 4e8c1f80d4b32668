"""
Run merging for WordprocessingML.

Word frequently splits a visible word across several formatting runs
(spell-check marks, revision ids, a change of font half way through a
word). A placeholder such as ``{owner_name}`` then ends up as
``{owner_</w:t></w:r><w:r><w:t>name}`` in ``word/document.xml`` and no
longer matches a regex. ``merge_runs`` collapses those boundaries so the
text becomes one contiguous span again.
"""

import re

# </w:t></w:r> immediately followed by a new run and text opening.
# "<w:r" and "<w:t" must be followed by whitespace or ">" so that
# <w:rPr>, <w:tab/>, <w:tbl> and friends never qualify.
RUN_BOUNDARY = r"</w:t></w:r><w:r(?:\s[^>]*)?><w:t(?:\s[^>]*)?>"
RUN_BOUNDARY_REGEX = re.compile(RUN_BOUNDARY)

# A text span followed by one or more run boundaries.
TEXT_CHAIN_REGEX = re.compile(
    r"<w:t(?P<attrs>\s[^>]*)?>(?P<body>[^<]*(?:" + RUN_BOUNDARY + r"[^<]*)+)</w:t>"
)

PRESERVE_SPACE = 'xml:space="preserve"'


def _merge_chain(match: re.Match) -> str:
    attrs = match.group("attrs") or ""
    body = match.group("body")
    if PRESERVE_SPACE not in attrs and any(
        PRESERVE_SPACE in boundary for boundary in RUN_BOUNDARY_REGEX.findall(body)
    ):
        attrs += " " + PRESERVE_SPACE
    return f"<w:t{attrs}>{RUN_BOUNDARY_REGEX.sub('', body)}</w:t>"


def merge_runs(xml: str) -> str:
    """
    Collapses adjacent text runs into a single text span.

    The surviving ``<w:t>`` keeps its attributes and gains
    ``xml:space="preserve"`` when any merged span carried it.
    """
    if not xml:
        return xml
    return TEXT_CHAIN_REGEX.sub(_merge_chain, xml)
