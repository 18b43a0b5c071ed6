# webdriver_utils/page_objects/fields.py

"""Field tags and lazily located elements for page objects.

A page object declares which of its elements must be ready before the page
counts as loaded. Either use a descriptor in the class body::

    class SearchPage(PageObject):
        search_box = PageElement((By.NAME, "q"), state=Visible)
        results = PageElements((By.CSS_SELECTOR, ".result"), state=Clickable)

or annotate an attribute the subclass assigns itself::

    class SearchPage(PageObject):
        header: Annotated[WebElement, Visible]

        def __init__(self, driver):
            super().__init__(driver)
            self.header = self.find_element((By.TAG_NAME, "h1"))
"""

import enum
import functools
import inspect
import logging
import typing
from typing import Annotated, NamedTuple, Optional, Tuple

from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC

from webdriver_utils.utils.wait_helpers import Locator, any_element_clickable, any_element_visible

logger = logging.getLogger(__name__)


class ElementState(enum.Enum):
    PRESENT = "present"
    VISIBLE = "visible"
    CLICKABLE = "clickable"


Existence = ElementState.PRESENT
Visible = ElementState.VISIBLE
Clickable = ElementState.CLICKABLE


class PageElement:
    """Descriptor that finds a single element each time it is read."""

    def __init__(self, locator: Locator, state: Optional[ElementState] = None, root: Optional[str] = None):
        self.locator = locator
        self.state = state
        # Name of another element field on the same page to search beneath
        self.root = root
        self.name: Optional[str] = None

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, page, owner=None):
        if page is None:
            return self
        return self.locate(page)

    def __set__(self, page, value):
        raise AttributeError(f"{self.name} is located by {self.locator} and cannot be assigned")

    def __repr__(self):
        return f"{type(self).__name__}({self.locator!r}, state={self.state})"

    def _root_element(self, page) -> Optional[WebElement]:
        if self.root is None:
            return None
        root = getattr(page, self.root)
        if root is None:
            # A scoped lookup never falls back to the whole document
            raise AttributeError(f"'{type(page).__name__}.{self.root}' holds no element to search beneath")
        return root

    def check_root(self, page):
        """Raises AttributeError when the root field is unassigned or holds None.

        A root declared as another descriptor is left to the wait, which retries
        until it can be found.
        """
        if self.root is None or isinstance(getattr(type(page), self.root, None), PageElement):
            return
        self._root_element(page)

    def locate(self, page):
        return page.find_element(self.locator, self._root_element(page))

    def condition(self, page, state: ElementState):
        """Wait condition re-locating the element on every poll."""
        if state is ElementState.PRESENT:
            return lambda driver: self.locate(page)
        if state is ElementState.VISIBLE:
            return lambda driver: EC.visibility_of(self.locate(page))(driver)
        return lambda driver: EC.element_to_be_clickable(self.locate(page))(driver)


class PageElements(PageElement):
    """Descriptor that finds every matching element each time it is read."""

    def locate(self, page):
        return page.find_elements(self.locator, self._root_element(page))

    def condition(self, page, state: ElementState):
        if state is ElementState.PRESENT:
            return lambda driver: self.locate(page) or False
        if state is ElementState.VISIBLE:
            return lambda driver: any_element_visible(self.locate(page))(driver)
        return lambda driver: any_element_clickable(self.locate(page))(driver)


def condition_for(value, state: ElementState):
    """Wait condition for an element (or collection of elements) already held by a field.

    Returns None when holding the value already satisfies ``state``.
    Raises TypeError for values that are neither a WebElement nor a collection of them.
    """
    if isinstance(value, WebElement):
        if state is ElementState.PRESENT:
            return None
        if state is ElementState.VISIBLE:
            return EC.visibility_of(value)
        return EC.element_to_be_clickable(value)

    if isinstance(value, (list, tuple)) and all(isinstance(element, WebElement) for element in value):
        if state is ElementState.PRESENT:
            return None
        if state is ElementState.VISIBLE:
            return any_element_visible(value)
        return any_element_clickable(value)

    raise TypeError(f"Cannot wait on a {type(value).__name__}; expected a WebElement or a list of them")


class TaggedField(NamedTuple):
    name: str
    state: ElementState
    # None for annotated attributes the page assigns itself
    element: Optional[PageElement]


def _state_from_hint(hint) -> Optional[ElementState]:
    if typing.get_origin(hint) is not Annotated:
        return None
    for meta in hint.__metadata__:
        if isinstance(meta, ElementState):
            return meta
    return None


def _resolved_hints(page_class) -> dict:
    try:
        return typing.get_type_hints(page_class, include_extras=True)
    except NameError as exc:
        # Unresolvable string annotations; only non-string Annotated hints can still be read
        logger.warning("Could not resolve annotations on %s: %s", page_class.__name__, exc)
        hints = {}
        for klass in reversed(page_class.__mro__):
            hints.update(inspect.get_annotations(klass))
        return hints


@functools.lru_cache(maxsize=None)
def tagged_fields(page_class) -> Tuple[TaggedField, ...]:
    """Tagged fields of a page class, base classes first. Computed once per class."""
    hints = _resolved_hints(page_class)
    fields = {}

    for klass in reversed(page_class.__mro__):
        own_annotations = inspect.get_annotations(klass)
        own_attrs = vars(klass)
        for name in [*own_annotations, *(n for n in own_attrs if n not in own_annotations)]:
            attr = own_attrs.get(name)
            if isinstance(attr, PageElement):
                state = attr.state
                if state is None and name in own_annotations:
                    # header: Annotated[WebElement, Visible] = PageElement(locator)
                    state = _state_from_hint(hints.get(name))
                element = attr
            elif name in own_annotations:
                state = _state_from_hint(hints.get(name))
                element = None
            else:
                continue

            if state is not None:
                fields[name] = TaggedField(name, state, element)
            elif name in fields:
                # Redeclared without a tag in a subclass
                del fields[name]

    return tuple(fields.values())
