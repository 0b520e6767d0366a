"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .infra.database import bootstrap_database
from .infra.repositories import SQLModelStorageRepository
from .services.identifiers import IdGenerator, random_id
from .services.persistence import PersistenceCodec
from .services.state_store import BudgetStore


@dataclass
class AppContext:
    """Wired-up core: storage, codec and the loaded store."""

    config: BaseConfig
    session_factory: Callable[[], Session]
    storage_repo: SQLModelStorageRepository
    codec: PersistenceCodec
    store: BudgetStore


def create_app_context(
    config: Optional[BaseConfig] = None, *, id_generator: IdGenerator = random_id
) -> AppContext:
    """Create the database, load the persisted state and return the context."""

    if config is None:
        config = BaseConfig()

    _engine, session_factory = bootstrap_database(config)
    storage_repo = SQLModelStorageRepository(session_factory)
    codec = PersistenceCodec(storage_repo, config=config)
    store = BudgetStore(codec, id_generator=id_generator)

    return AppContext(
        config=config,
        session_factory=session_factory,
        storage_repo=storage_repo,
        codec=codec,
        store=store,
    )
