# environmentalist/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from environmentalist.core.events import FaultEvent


@runtime_checkable
class Handler(Protocol):
    """
    Handler protocol for fault dispatch.

    Methods:
        handle(event): Process a FaultEvent. Returning ``False`` declines the
            event and lets the next handler see it; any other value, including
            ``None``, claims it.

    Runtime Invariants:
    - Handlers are compared by equality for deduplication and removal, so two
      handlers wrapping the same callable must compare equal.

    Error Handling:
    - Exceptions raised by ``handle`` are not caught by the chain and reach
      whoever dispatched the event.
    """

    def handle(self, event: "FaultEvent") -> Any:
        """Process the event, returning ``False`` to decline it."""
        ...


@runtime_checkable
class Host(Protocol):
    """
    Host protocol describing the interpreter extension points the environment
    installs itself into.

    Methods:
        install_loader(environment): Register a symbol loader backed by the
            environment.
        uninstall_loader(environment): Remove that loader again.
        install_fault_handler(callback): Route host faults to ``callback`` and
            return the displaced handler (or None if there was none).
        restore_fault_handler(previous): Reinstate exactly the handler returned
            by ``install_fault_handler``.
        load(name, path): Load the file at ``path`` as symbol ``name``.

    Runtime Invariants:
    - ``restore_fault_handler(install_fault_handler(cb))`` leaves the host as
      it was before the install.
    """

    def install_loader(self, environment: Any) -> None: ...

    def uninstall_loader(self, environment: Any) -> None: ...

    def install_fault_handler(self, callback: Callable[["FaultEvent"], bool]) -> Optional[Handler]: ...

    def restore_fault_handler(self, previous: Optional[Handler]) -> None: ...

    def load(self, name: str, path: str) -> Any: ...
