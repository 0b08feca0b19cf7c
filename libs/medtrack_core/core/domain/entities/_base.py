from dataclasses import MISSING, fields
from typing import Any, TypeVar

T = TypeVar("T", bound="EntityMixin")


class EntityMixin:
    """Mapping helpers shared by the record entities (all of them dataclasses)."""

    @classmethod
    def from_model(cls: type[T], model: Any) -> T:
        """
        Build the entity from a Django model instance.

        Each dataclass field is read from the attribute of the same name;
        FK columns are picked up through their ``<name>_id`` attributes.
        Attributes the model lacks fall back to the field default.
        """
        data: dict[str, Any] = {}
        for f in fields(cls):
            if hasattr(model, f.name):
                data[f.name] = getattr(model, f.name)
            elif f.default is MISSING and f.default_factory is MISSING:
                raise AttributeError(f"{type(model).__name__} has no attribute {f.name!r} for {cls.__name__}")
        return cls(**data)
