from typing import Generic, TypeVar

from exemplar.schemas.search import ExamplePhrase, ImageResult

T = TypeVar("T")


class IdentitySet(Generic[T]):
    """Insertion-ordered set keyed on object identity.

    Phrases and images coming from two different searches can be equal by
    value, so membership here is by ``is``.
    """

    def __init__(self) -> None:
        self._items: list[T] = []

    def __contains__(self, item: T) -> bool:
        return any(existing is item for existing in self._items)

    def toggle(self, item: T) -> bool:
        """Add ``item`` if absent, remove it if present. Returns membership after."""
        for i, existing in enumerate(self._items):
            if existing is item:
                del self._items[i]
                return False
        self._items.append(item)
        return True

    def clear(self) -> None:
        self._items.clear()

    def items(self) -> list[T]:
        return list(self._items)


class SelectionState:
    def __init__(self) -> None:
        self.curation_mode = False
        self.phrases: IdentitySet[ExamplePhrase] = IdentitySet()
        self.images: IdentitySet[ImageResult] = IdentitySet()

    def toggle_mode(self) -> bool:
        self.curation_mode = not self.curation_mode
        if not self.curation_mode:
            self.clear()
        return self.curation_mode

    def exit_mode(self) -> None:
        self.curation_mode = False
        self.clear()

    def toggle_phrase(self, phrase: ExamplePhrase) -> bool:
        if not self.curation_mode:
            return phrase in self.phrases
        return self.phrases.toggle(phrase)

    def toggle_image(self, image: ImageResult) -> bool:
        if not self.curation_mode:
            return image in self.images
        return self.images.toggle(image)

    def clear(self) -> None:
        self.phrases.clear()
        self.images.clear()
