"""Model-to-serializer lookup shared by every request."""

from __future__ import annotations

from typing import Any

from jsonapi_render.serializers.base import JSONAPISerializer


class SerializerRegistry:
    """Map model classes to serializer classes.

    Populate it during startup, then call ``freeze()``; lookups are safe to
    share between concurrent requests once frozen.
    """

    def __init__(self, default: type[JSONAPISerializer] = JSONAPISerializer) -> None:
        self._by_model: dict[type, type[JSONAPISerializer]] = {}
        self._default = default
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(
        self, serializer_class: type[JSONAPISerializer]
    ) -> type[JSONAPISerializer]:
        """Register a serializer by its ``Meta.model``; usable as a class decorator."""
        if self._frozen:
            raise RuntimeError("Serializer registry is frozen.")
        model = getattr(serializer_class.Meta, "model", None)
        if model is None:
            raise ValueError(f"{serializer_class.__name__}.Meta.model must be set.")
        self._by_model[model] = serializer_class
        return serializer_class

    def freeze(self) -> None:
        self._frozen = True

    def serializer_class_for(self, instance: Any) -> type[JSONAPISerializer]:
        for klass in type(instance).__mro__:
            serializer_class = self._by_model.get(klass)
            if serializer_class is not None:
                return serializer_class
        return self._default

    def serializer_for(self, instance: Any) -> JSONAPISerializer:
        """Instantiate the serializer registered for ``instance``'s class."""
        return self.serializer_class_for(instance)(registry=self)

