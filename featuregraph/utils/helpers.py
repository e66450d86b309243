"""Helper utilities"""
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

Table = List[List[str]]


def object_name_for(file: str) -> str:
    """Object name of the feature defined in a file"""
    return Path(str(file).replace(".feature", "").replace(".", "_")).name


def strip_tag_marker(tag_name: str) -> str:
    """Remove the leading @ from a tag name"""
    return re.sub(r"^@", "", tag_name)


def deep_get(dictionary: Mapping, keys: str, default: Any = None) -> Any:
    """Get nested dictionary value using dot notation"""
    value = dictionary

    for key in keys.split('.'):
        if isinstance(value, Mapping) and key in value:
            value = value[key]
        else:
            return default

    return value


def matrix(rows: Iterable[Mapping]) -> Table:
    """Flatten gherkin row records into rows of raw cell values"""
    return [[cell.get("value") or "" for cell in row.get("cells", [])] for row in rows]


def clone_table(base: Table) -> Table:
    return [list(row) for row in base]


def substitute_placeholders(text: str, values: Mapping[str, str]) -> str:
    """Replace every <column> token whose column is known by its value.

    All columns are replaced in a single pass, so a value that itself looks
    like a placeholder is never expanded again. Unknown tokens stay as-is.
    """
    if not values or "<" not in text:
        return text

    pattern = re.compile(
        "|".join(f"<{re.escape(key)}>" for key in sorted(values, key=len, reverse=True))
    )
    return pattern.sub(lambda match: values[match.group(0)[1:-1]], text)


def substitute_table(table: Table, values: Mapping[str, str]) -> Table:
    """Copy of a table with placeholders substituted in every cell"""
    return [[substitute_placeholders(cell, values) for cell in row] for row in clone_table(table)]


def join_comments(comments: Iterable[Mapping]) -> str:
    """Comment records as one block of text"""
    return "\n".join(
        str(comment.get("text", comment.get("value", ""))).strip() for comment in comments
    )


def tag_names(node: Mapping) -> List[str]:
    return [strip_tag_marker(tag["name"]) for tag in node.get("tags") or []]


def line_of(node: Mapping) -> int:
    return int((node.get("location") or {}).get("line") or 0)


def values_dict(headers: List[str], row: List[str]) -> Dict[str, str]:
    """Map each header to the row's value, empty string for blank or missing cells"""
    return {header: (row[index] if index < len(row) and row[index] else "")
            for index, header in enumerate(headers)}
