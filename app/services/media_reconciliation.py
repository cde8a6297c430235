"""Apply client edit instructions to a blog's ordered media list.

The three instructions are applied in a fixed order so indices sent by the
client always refer to the list as the client saw it:

1. replace: ``replace_indices[i]`` gets ``replacements[i]``
2. remove: indices are processed highest first so popping one slot never
   shifts a slot that is still waiting to be removed
3. append: ``additions`` go to the end

Every index is checked before anything changes; an invalid instruction raises
``InvalidRequestError`` and leaves the input untouched.
"""
import json
from dataclasses import dataclass, field

from app.exceptions import InvalidRequestError


@dataclass
class ReconcileResult:
    items: list
    replaced: dict = field(default_factory=dict)
    removed: list = field(default_factory=list)

    @property
    def discarded(self) -> list:
        """Items that left the list and whose stored files can go."""
        return list(self.replaced.keys()) + list(self.removed)


def parse_index_list(raw, field_name: str):
    """Read an index list sent as JSON text, e.g. ``"[0, 2]"``.

    Multipart clients sometimes double-quote the value, so one surrounding
    pair of quotes is stripped before decoding. Returns ``None`` when the
    instruction is absent.
    """
    if raw is None:
        return None

    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
            text = text[1:-1]
        try:
            value = json.loads(text)
        except ValueError as e:
            raise InvalidRequestError(
                f"{field_name} must be a JSON array of integers"
            ) from e
    else:
        value = raw

    if isinstance(value, int) and not isinstance(value, bool):
        value = [value]

    if not isinstance(value, list) or any(
        isinstance(index, bool) or not isinstance(index, int) for index in value
    ):
        raise InvalidRequestError(f"{field_name} must be a JSON array of integers")

    return value


def _check_index(index: int, size: int):
    if index < 0 or index >= size:
        raise InvalidRequestError(f"Invalid media index: {index}.")


def reconcile_media(
    items,
    replacements=None,
    replace_indices=None,
    remove_indices=None,
    additions=None,
) -> ReconcileResult:
    replacements = list(replacements or [])
    additions = list(additions or [])
    result_items = list(items)
    replaced = {}
    removed = []

    if replace_indices is not None:
        if len(replacements) != len(replace_indices):
            raise InvalidRequestError(
                "The number of replacement media and indices must match."
            )
        if len(set(replace_indices)) != len(replace_indices):
            raise InvalidRequestError("Replacement media indices must be unique.")
        for index in replace_indices:
            _check_index(index, len(result_items))

        for index, new_item in zip(replace_indices, replacements):
            replaced[result_items[index]] = new_item
            result_items[index] = new_item
    elif replacements:
        raise InvalidRequestError("Replacement media require mediasIndices.")

    if remove_indices:
        unique_indices = sorted(set(remove_indices), reverse=True)
        for index in unique_indices:
            _check_index(index, len(result_items))

        for index in unique_indices:
            removed.append(result_items.pop(index))

    result_items.extend(additions)

    return ReconcileResult(items=result_items, replaced=replaced, removed=removed)
