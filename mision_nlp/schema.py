# mision_nlp/schema.py

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

# --- Schema types accepted by Gemini's responseSchema ---
OBJECT = "OBJECT"
ARRAY = "ARRAY"
STRING = "STRING"
NUMBER = "NUMBER"
BOOLEAN = "BOOLEAN"
_TYPES = (OBJECT, ARRAY, STRING, NUMBER, BOOLEAN)


@dataclass(frozen=True)
class SchemaDescriptor:
    """Declarative description of the JSON shape requested from the model.

    Instances are immutable and well-formed by construction: objects carry
    at least one property, arrays carry an item schema, scalars carry
    neither.
    """
    type: str
    properties: Tuple[Tuple[str, "SchemaDescriptor"], ...] = ()
    items: Optional["SchemaDescriptor"] = None

    def __post_init__(self):
        if self.type not in _TYPES:
            raise ValueError(f"Unknown schema type '{self.type}'.")
        if self.type == OBJECT:
            if not self.properties:
                raise ValueError("OBJECT schema needs at least one property.")
            names = [name for name, _ in self.properties]
            if len(set(names)) != len(names):
                raise ValueError(f"Duplicate property names in schema: {names}")
        elif self.properties:
            raise ValueError(f"{self.type} schema cannot declare properties.")
        if self.type == ARRAY and self.items is None:
            raise ValueError("ARRAY schema needs an item schema.")
        if self.type != ARRAY and self.items is not None:
            raise ValueError(f"{self.type} schema cannot declare items.")

    def property_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.properties)

    def to_wire(self) -> Dict[str, Any]:
        """Renders the descriptor as a Gemini `responseSchema` dict."""
        wire: Dict[str, Any] = {"type": self.type}
        if self.properties:
            wire["properties"] = {name: prop.to_wire() for name, prop in self.properties}
        if self.items is not None:
            wire["items"] = self.items.to_wire()
        return wire


def obj(**properties: SchemaDescriptor) -> SchemaDescriptor:
    return SchemaDescriptor(OBJECT, properties=tuple(properties.items()))


def array(items: SchemaDescriptor) -> SchemaDescriptor:
    return SchemaDescriptor(ARRAY, items=items)


def string() -> SchemaDescriptor:
    return SchemaDescriptor(STRING)


def number() -> SchemaDescriptor:
    return SchemaDescriptor(NUMBER)


def boolean() -> SchemaDescriptor:
    return SchemaDescriptor(BOOLEAN)
