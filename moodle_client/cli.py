"""
Command line front-end for the Moodle access client.

Reads MOODLE_URL / MOODLE_TOKEN (and MOODLE_SMTP_* for password resets)
from the environment or a .env file.
"""

import argparse
import asyncio
import dataclasses
import json
import sys
from typing import Any, List, Optional

from shared.config import MoodleSettings, get_settings
from shared.errors import MoodleClientException
from shared.logging import configure_logging
from moodle_client.api import MoodleApi


def _to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, list):
        return [_to_jsonable(v) for v in value]
    return value


async def run(args: argparse.Namespace, settings: MoodleSettings) -> Any:
    """Execute one command and return a JSON-serialisable result."""
    api = MoodleApi.from_settings(settings)

    if args.command == "courses":
        return _to_jsonable(await api.get_courses(args.search))

    if args.command == "person":
        return _to_jsonable(await api.get_person_by_email(args.email))

    if args.command == "groups":
        return _to_jsonable(await api.get_course_groups(args.course_id))

    if args.command == "module-access":
        module = await api.get_course_module(args.cm_id)
        return {
            "cm_id": module.id,
            "name": module.name,
            "availability": module.availability.to_dict() if module.availability else None,
            "restricted": module.is_restricted_for(args.group_ids),
        }

    if args.command == "reset-password":
        person = await api.reset_password_with_email(args.email)
        return {"moodle_id": person.moodle_id, "email": person.email, "reset": True}

    raise ValueError(f"Unknown command: {args.command}")


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="moodle-access", description="Query a Moodle site's web service API.")
    parser.add_argument("--log-level", default=None, help="Override MOODLE_LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    courses = sub.add_parser("courses", help="Search courses")
    courses.add_argument("search", help="Search text")

    person = sub.add_parser("person", help="Look up an account by email")
    person.add_argument("email")

    groups = sub.add_parser("groups", help="List a course's groups")
    groups.add_argument("course_id", type=int)

    access = sub.add_parser("module-access", help="Check whether group members may access a course module")
    access.add_argument("cm_id", type=int, help="Course module id")
    access.add_argument("group_ids", type=int, nargs="*", help="Learner's group ids")

    reset = sub.add_parser("reset-password", help="Reset a password and mail it to the account owner")
    reset.add_argument("email")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    configure_logging("moodle", args.log_level or settings.log_level)

    try:
        result = asyncio.run(run(args, settings))
    except KeyboardInterrupt:
        return 130
    except MoodleClientException as exc:
        print(exc.to_response().model_dump_json(indent=2), file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
