"""Multiplexer configuration.

MuxConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MuxConfig:
    """ServeMux configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = MuxConfig(sync_handlers_in_thread=True)
    """

    # A HEAD request to a path with only a GET registration uses the GET handler
    head_falls_back_to_get: bool = True

    # Run plain ``def`` terminal handlers on a worker thread (anyio.to_thread)
    sync_handlers_in_thread: bool = False
