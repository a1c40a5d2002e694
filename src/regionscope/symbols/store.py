"""Versioned symbol snapshot for the active document.

Symbols come from an external analyzer, either pushed with ``publish`` or
pulled from a configured provider. Like the region store, the version is
always recorded and ``on_did_change_document_symbols`` fires only when the
symbol tree differs by value.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from regionscope.core.events import EventEmitter
from regionscope.core.scheduling import Debouncer
from regionscope.document import TextDocument, versioned_document_id
from regionscope.symbols.models import DocumentSymbol, flatten_symbols

logger = structlog.get_logger()

SymbolProvider = Callable[[TextDocument], list[DocumentSymbol]]


class SymbolStore:
    """Owns the symbol tree of one active document."""

    def __init__(self, provider: SymbolProvider | None = None, *, debounce_sec: float = 0.1) -> None:
        self._provider = provider
        self._document_id: str | None = None
        self._version: int | None = None
        self._top_level_symbols: list[DocumentSymbol] = []
        self._flattened_symbols: list[DocumentSymbol] = []
        self._pending_document: TextDocument | None = None
        self._debouncer = Debouncer(debounce_sec, self._refresh_pending, name="symbol_refresh")
        self.on_did_change_document_symbols = EventEmitter("document_symbols")
        # Fires after every publish, changed or not
        self.on_did_refresh = EventEmitter("symbol_refresh")

    @property
    def document_id(self) -> str | None:
        return self._document_id

    @property
    def version(self) -> int | None:
        return self._version

    @property
    def versioned_document_id(self) -> str | None:
        if self._document_id is None or self._version is None:
            return None
        return versioned_document_id(self._document_id, self._version)

    @property
    def top_level_symbols(self) -> list[DocumentSymbol]:
        return self._top_level_symbols

    @property
    def flattened_symbols(self) -> list[DocumentSymbol]:
        return self._flattened_symbols

    @property
    def has_provider(self) -> bool:
        return self._provider is not None

    def publish(self, document_id: str, version: int, symbols: list[DocumentSymbol]) -> None:
        """Accept a symbol tree computed for ``document_id`` at ``version``."""
        changed = symbols != self._top_level_symbols
        self._document_id = document_id
        self._version = version
        if changed:
            self._top_level_symbols = symbols
            self._flattened_symbols = flatten_symbols(symbols)
        logger.debug(
            "symbol_store_published",
            document_id=document_id,
            version=version,
            symbol_count=len(self._flattened_symbols),
            changed=changed,
        )
        if changed:
            self.on_did_change_document_symbols.fire()
        self.on_did_refresh.fire()

    def refresh(self, document: TextDocument) -> None:
        """Pull symbols for ``document`` from the provider now.

        Without a provider an empty tree is published, so documents in
        languages with no analyzer still reach version agreement.
        """
        self._debouncer.cancel()
        self._pending_document = None
        if self._provider is None:
            self.publish(document.uri, document.version, [])
            return
        try:
            symbols = self._provider(document)
        except Exception as e:
            # Keep the previous snapshot; the version stays behind, which
            # defers synthesis until the provider succeeds
            logger.error(
                "symbol_provider_failed",
                document_id=document.uri,
                version=document.version,
                error=str(e),
            )
            return
        self.publish(document.uri, document.version, symbols)

    def schedule_refresh(self, document: TextDocument) -> None:
        self._pending_document = document
        self._debouncer.schedule()

    def flush(self) -> bool:
        return self._debouncer.flush()

    def _refresh_pending(self) -> None:
        document = self._pending_document
        if document is not None:
            self.refresh(document)

    def clear(self) -> None:
        self._debouncer.cancel()
        self._pending_document = None
        self._document_id = None
        self._version = None
        had_symbols = bool(self._top_level_symbols)
        self._top_level_symbols = []
        self._flattened_symbols = []
        if had_symbols:
            self.on_did_change_document_symbols.fire()
        self.on_did_refresh.fire()

    def close(self) -> None:
        self._debouncer.cancel()
        self.on_did_change_document_symbols.dispose()
        self.on_did_refresh.dispose()
