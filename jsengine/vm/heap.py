"""Heap storage for objects, arrays, functions and strings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from jsengine.vm.bytecode import Bytecode
from jsengine.vm.value import Undefined, Value


@dataclass
class ObjectEntry:
    """A heap object: a mapping of property names to values."""

    properties: dict[str, Value] = field(default_factory=dict)


@dataclass
class ArrayEntry:
    """A heap array."""

    elements: list[Value] = field(default_factory=list)


@dataclass
class FunctionEntry:
    """A compiled function with its captured variables."""

    bytecode: Bytecode
    arg_count: int
    local_count: int
    closure_vars: dict[str, Value] = field(default_factory=dict)


@dataclass
class StringEntry:
    """A heap-allocated string."""

    value: str


HeapEntry = Union[ObjectEntry, ArrayEntry, FunctionEntry, StringEntry]


class Heap:
    """Append-only store of entries addressed by integer handles."""

    def __init__(self) -> None:
        self._entries: list[HeapEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def _allocate(self, entry: HeapEntry) -> int:
        self._entries.append(entry)
        return len(self._entries) - 1

    def alloc_object(self) -> int:
        return self._allocate(ObjectEntry())

    def alloc_array(self) -> int:
        return self._allocate(ArrayEntry())

    def alloc_function(self, bytecode: Bytecode, arg_count: int, local_count: int) -> int:
        return self._allocate(FunctionEntry(bytecode, arg_count, local_count))

    def get(self, handle: int) -> HeapEntry | None:
        """Return the entry for a handle, or None if there is none."""
        if 0 <= handle < len(self._entries):
            return self._entries[handle]
        return None

    def get_function_info(self, handle: int) -> FunctionEntry | None:
        entry = self.get(handle)
        return entry if isinstance(entry, FunctionEntry) else None

    def set_closure_var(self, handle: int, name: str, value: Value) -> None:
        entry = self.get(handle)
        if isinstance(entry, FunctionEntry):
            entry.closure_vars[name] = value

    def _object(self, handle: int) -> ObjectEntry | None:
        entry = self.get(handle)
        return entry if isinstance(entry, ObjectEntry) else None

    def _array(self, handle: int) -> ArrayEntry | None:
        entry = self.get(handle)
        return entry if isinstance(entry, ArrayEntry) else None

    def set_object_property(self, handle: int, key: str, value: Value) -> None:
        obj = self._object(handle)
        if obj is not None:
            obj.properties[key] = value

    def get_object_property(self, handle: int, key: str) -> Value | None:
        obj = self._object(handle)
        return obj.properties.get(key) if obj is not None else None

    def remove_object_property(self, handle: int, key: str) -> None:
        obj = self._object(handle)
        if obj is not None:
            obj.properties.pop(key, None)

    def has_object_property(self, handle: int, key: str) -> bool:
        obj = self._object(handle)
        return obj is not None and key in obj.properties

    def push_array_element(self, handle: int, value: Value) -> None:
        arr = self._array(handle)
        if arr is not None:
            arr.elements.append(value)

    def get_array_element(self, handle: int, idx: int) -> Value | None:
        arr = self._array(handle)
        if arr is None or not 0 <= idx < len(arr.elements):
            return None
        return arr.elements[idx]

    def set_array_element(self, handle: int, idx: int, value: Value) -> None:
        """Store an element, growing the array with undefined if needed."""
        if idx < 0:
            raise ValueError("array index must not be negative")
        arr = self._array(handle)
        if arr is None:
            return
        if idx >= len(arr.elements):
            arr.elements.extend(Undefined() for _ in range(idx + 1 - len(arr.elements)))
        arr.elements[idx] = value