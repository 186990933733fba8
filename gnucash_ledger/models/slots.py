"""
Slot Models

GnuCash attaches schema-free key/value metadata ("slots") to objects.
A slot value is either a scalar (a kind tag plus its text content) or a
frame holding a nested, ordered list of slots.

DESIGN DECISION: The value is a discriminated union, not a class hierarchy.
Consumers check the tag before interpreting content, and a shape that does
not match what they look for is simply "no match" - NEVER an error.
Unrelated or future-schema slots must pass through untouched.
"""

from typing import Annotated, Iterator, Literal, Optional, Union

from pydantic import BaseModel, Field


INVOICE_SLOT_KEY = "gncInvoice"
INVOICE_GUID_KEY = "invoice-guid"
GUID_KIND = "guid"

PATH_SEPARATOR = "/"


class ScalarValue(BaseModel):
    """
    A leaf value.

    kind is the slot type as written in the document
    (e.g. "guid", "string", "integer", "numeric", "timespec", "gdate").
    """
    tag: Literal["scalar"] = "scalar"
    kind: str
    content: str


class FrameValue(BaseModel):
    """A nested, ordered list of slots."""
    tag: Literal["frame"] = "frame"
    slots: list["Slot"] = Field(default_factory=list)


SlotValue = Annotated[Union[ScalarValue, FrameValue], Field(discriminator="tag")]


class Slot(BaseModel):
    """
    A single key/value metadata node.

    Keys are not unique among siblings.
    """
    key: str
    value: SlotValue


FrameValue.model_rebuild()
Slot.model_rebuild()


def _walk(slots: list[Slot], prefix: str) -> Iterator[tuple[str, Slot]]:
    for slot in slots:
        path = f"{prefix}{PATH_SEPARATOR}{slot.key}" if prefix else slot.key
        yield path, slot
        if isinstance(slot.value, FrameValue):
            yield from _walk(slot.value.slots, path)


class SlotTree(BaseModel):
    """
    The root of a slot hierarchy: an ordered list of slots.

    An absent slot tree in the document is treated as an empty one.
    """
    slots: list[Slot] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.slots)

    def get(self, key: str) -> Optional[Slot]:
        """First direct child with the given key, None if there is none."""
        for slot in self.slots:
            if slot.key == key:
                return slot
        return None

    def lookup(self, path: str) -> Optional[Slot]:
        """
        Follow a slash-separated key path through nested frames.

        At each level the first slot with a matching key is taken.
        Any shape mismatch on the way (a scalar where a frame is needed,
        a missing key) yields None.
        """
        keys = [key for key in path.split(PATH_SEPARATOR) if key]
        if not keys:
            return None

        current: list[Slot] = self.slots
        found: Optional[Slot] = None
        for depth, key in enumerate(keys):
            found = next((slot for slot in current if slot.key == key), None)
            if found is None:
                return None
            if depth < len(keys) - 1:
                if not isinstance(found.value, FrameValue):
                    return None
                current = found.value.slots
        return found

    def walk(self) -> Iterator[tuple[str, Slot]]:
        """Depth-first (path, slot) pairs, in document order."""
        return _walk(self.slots, "")

    def find_invoice_references(self) -> list[str]:
        """
        Invoice ids recorded on this tree, in document order.

        Expected shape, per candidate:
            gncInvoice (frame)
                invoice-guid (scalar, kind "guid") = "<invoice id>"

        Only the first child of the frame is inspected. A candidate that
        deviates anywhere is skipped without comment and the scan goes on.
        Duplicates are kept.
        """
        references = []

        for slot in self.slots:
            if slot.key != INVOICE_SLOT_KEY:
                continue

            if not isinstance(slot.value, FrameValue) or not slot.value.slots:
                continue

            first = slot.value.slots[0]
            if first.key != INVOICE_GUID_KEY:
                continue

            if not isinstance(first.value, ScalarValue) or first.value.kind != GUID_KIND:
                continue

            references.append(first.value.content)

        return references
