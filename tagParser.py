from patterns import ANNOTATION_PREFIX, compiled_id_pattern, compiled_tag_pattern


def classify_and_extract(line):
    """
    Classifies a single line and pulls out its record identifier and tags.

    Lines starting with a tab are annotation lines and are ignored. Other
    lines must contain an identifier such as M24_230001 and at least one
    【tag】 to count as data.

    Args:
        line (str): One line of text, without its newline.

    Returns:
        tuple: (identifier, [tag, ...]) with tags in order of appearance,
        or None when the line carries no data.
    """
    if line.startswith(ANNOTATION_PREFIX):
        return None

    trimmed = line.strip()
    id_match = compiled_id_pattern.search(trimmed)
    if not id_match:
        return None

    tags = compiled_tag_pattern.findall(trimmed)
    if not tags:
        return None

    return id_match.group(0), tags


def split_lines(text):
    """Splits text on newlines, dropping empty pieces."""
    return [line for line in text.split('\n') if line]
