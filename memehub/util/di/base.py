"""Provider base class."""

from typing import ClassVar, Literal

from dishka import Provider

# Components a test container can swap for in-memory doubles
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Dishka provider carrying the metadata ``get_provider`` reads.

    Swappable components set ``__mock_component__`` on their base class and
    ``__is_mock__ = True`` on the test double.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
