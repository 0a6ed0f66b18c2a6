"""
Error types raised by the memory store.
"""


class MemoryEngineError(Exception):
    """Base class for failures raised from memory operations."""


class MemoryNotFoundError(MemoryEngineError):
    def __init__(self, memory_id: int):
        super().__init__(f"Memory {memory_id} not found")
        self.memory_id = memory_id
