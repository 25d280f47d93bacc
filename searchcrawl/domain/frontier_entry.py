from typing import NamedTuple


class FrontierEntry(NamedTuple):
    """An address waiting in the frontier, with its hop count from the seed."""
    address: str
    depth: int
