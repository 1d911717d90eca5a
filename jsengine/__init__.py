"""A small JavaScript engine core: a bytecode VM and a semantic analyzer."""

__version__ = "0.1.0"