"""Rebuild missing chat index entries from stored chats.

Usage:
    python -m scripts.reconcile_indexes --owner user_2abc
    python -m scripts.reconcile_indexes --all
"""

import argparse
import asyncio
import sys

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.database import async_session_factory, engine
from app.core.exceptions import StorageUnavailableError
from app.repositories.chat_repo import ChatRepository
from app.repositories.index_repo import ChatIndexRepository
from app.services.conversation_service import ConversationService


async def reconcile(
    owner_ids: list[str] | None,
    session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
) -> list[str]:
    """Reconcile the given owners, or every owner with chats when None.

    A failing owner is reported and skipped. Returns the owners that failed.
    """
    failed: list[str] = []
    async with session_factory() as session:
        chat_repo = ChatRepository(session)
        index_repo = ChatIndexRepository(session)
        if owner_ids is None:
            owner_ids = await chat_repo.find_owner_ids()

        total = 0
        for owner_id in owner_ids:
            service = ConversationService(
                chat_repo=chat_repo,
                index_repo=index_repo,
                session=session,
                owner_id=owner_id,
            )
            try:
                added = await service.reconcile_index()
            except StorageUnavailableError as exc:
                failed.append(owner_id)
                print(f"{owner_id}: failed ({exc.message})")
                continue
            total += added
            print(f"{owner_id}: {added} summaries added")

    done = len(owner_ids) - len(failed)
    print(f"Reconciled {done}/{len(owner_ids)} owners, {total} summaries added")
    return failed


async def run(owner_ids: list[str] | None) -> int:
    try:
        failed = await reconcile(owner_ids)
    finally:
        await engine.dispose()
    return 1 if failed else 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Reconcile user chat indexes")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--owner", action="append", help="Owner id (repeatable)")
    group.add_argument("--all", action="store_true", help="Every owner with chats")
    args = parser.parse_args()

    sys.exit(asyncio.run(run(None if args.all else args.owner)))


if __name__ == "__main__":
    main()
