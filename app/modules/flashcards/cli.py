from __future__ import annotations

import argparse
import asyncio
import json

from app.core.config import settings
from app.core.logging import setup_logging
from app.modules.flashcards.errors import FlashcardsError
from app.modules.flashcards.main import create_session
from app.modules.flashcards.session import StudySession


async def _generate(session: StudySession, subject: str) -> dict:
    fs = await session.submit_new_subject(subject)
    return fs.model_dump()


async def _more(session: StudySession, subject: str) -> dict:
    session.select_stored_set(subject)
    added = await session.add_more()
    return {
        "subject": subject,
        "added": [c.model_dump() for c in added],
        "total": len(session.cards),
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="flashcards-gen", description="AI flashcards CLI"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("generate", help="Generate and store a new flashcard set")
    g.add_argument("--subject", "-s", required=True, help="Subject or topic")

    m = sub.add_parser("more", help="Add more flashcards to a stored set")
    m.add_argument("--subject", "-s", required=True, help="Stored set subject")

    sub.add_parser("list", help="List stored set subjects, newest first")

    sh = sub.add_parser("show", help="Print a stored set")
    sh.add_argument("--subject", "-s", required=True)

    d = sub.add_parser("delete", help="Delete a stored set")
    d.add_argument("--subject", "-s", required=True)

    args = parser.parse_args(argv)
    setup_logging(settings.log_level)
    session = create_session()
    try:
        if args.cmd == "generate":
            out = asyncio.run(_generate(session, args.subject))
        elif args.cmd == "more":
            out = asyncio.run(_more(session, args.subject))
        elif args.cmd == "list":
            out = [
                {"subject": s.subject, "cards": len(s.flashcards)}
                for s in session.list_sets()
            ]
        elif args.cmd == "show":
            out = session.select_stored_set(args.subject).model_dump()
        else:
            session.delete_stored_set(args.subject)
            out = {"deleted": args.subject}
    except FlashcardsError as e:
        print(json.dumps({"error": str(e)}, indent=2))
        return 1
    finally:
        session.close()

    print(json.dumps(out, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
