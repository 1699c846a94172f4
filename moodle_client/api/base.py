"""
Request plumbing shared by every Moodle web service call.
"""

import json
from typing import Any, Optional, Sequence, Tuple, Type, TypeVar, Union
from urllib.parse import urlencode

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from shared.errors import MoodleApiError, UnexpectedResponseError
from shared.logging import get_logger, set_call_context
from moodle_client.transport import UrlFetcher

Params = Sequence[Tuple[str, Any]]
T = TypeVar("T")

REST_PATH = "webservice/rest/server.php"
UPLOAD_PATH = "webservice/upload.php"
EXCEPTION_PREFIX = '{"exception":"'


def read_error(body: str) -> Optional[dict]:
    """Decode Moodle's exception envelope, or None when ``body`` is not one."""
    if not body.startswith(EXCEPTION_PREFIX):
        return None
    try:
        envelope = json.loads(body)
    except json.JSONDecodeError:
        return {"message": body}
    if not isinstance(envelope, dict):
        return {"message": body}
    return envelope


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class MoodleApiBase:
    """Builds web service URLs, checks error envelopes and parses responses."""

    def __init__(self, base_url: str, token: str, fetcher: Optional[UrlFetcher] = None):
        self.base = base_url if base_url.endswith("/") else base_url + "/"
        self.token = token
        self.fetcher = fetcher or UrlFetcher()
        self.logger = get_logger("moodle.api")

    def build_url(self, wsfunction: str, params: Params = ()) -> str:
        query = [
            ("wstoken", self.token),
            ("wsfunction", wsfunction),
            ("moodlewsrestformat", "json"),
        ]
        query.extend((key, _format_value(value)) for key, value in params)
        return f"{self.base}{REST_PATH}?{urlencode(query)}"

    async def _call(self, wsfunction: str, params: Params = ()) -> str:
        """Invoke a web service function and return the raw body."""
        set_call_context(wsfunction)
        result = await self.fetcher.get(self.build_url(wsfunction, params))
        body = result.body

        envelope = read_error(body)
        if envelope is not None:
            message = envelope.get("message") or envelope.get("exception") or body
            self.logger.info("Moodle returned an exception", errorcode=envelope.get("errorcode"))
            raise MoodleApiError(message, details={
                "wsfunction": wsfunction,
                "exception": envelope.get("exception"),
                "errorcode": envelope.get("errorcode"),
                "debuginfo": envelope.get("debuginfo"),
            })

        if result.status_code != 200:
            raise UnexpectedResponseError(
                f"Server returned unexpected status {result.status_code}",
                details={"wsfunction": wsfunction, "status_code": result.status_code}
            )

        return body

    async def _call_json(self, wsfunction: str, params: Params = ()) -> Any:
        body = await self._call(wsfunction, params)
        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise UnexpectedResponseError(
                f"Server returned unexpected response. {e.msg}",
                details={"wsfunction": wsfunction}
            ) from e

    async def _call_parsed(self, wsfunction: str, shape: Union[Type[T], Any], params: Params = ()) -> T:
        """Invoke ``wsfunction`` and validate the JSON body against ``shape``."""
        data = await self._call_json(wsfunction, params)
        return self._parse(shape, data, wsfunction)

    async def _call_acknowledged(self, wsfunction: str, params: Params = ()) -> None:
        """Invoke a write function whose only valid answer is an empty acknowledgement.

        Depending on the Moodle version that is an empty body, ``null`` or
        an object with an empty ``warnings`` list.
        """
        body = await self._call(wsfunction, params)
        if body in ("", "null"):
            return
        try:
            data = json.loads(body)
        except json.JSONDecodeError:
            data = None
        if isinstance(data, dict) and not data.get("warnings"):
            return
        raise UnexpectedResponseError(
            f"Server returned unexpected response: {body}",
            details={"wsfunction": wsfunction}
        )

    def _parse_upload(self, body: str) -> Any:
        """Decode a ``webservice/upload.php`` response, which reports errors its own way."""
        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise UnexpectedResponseError(
                f"Server returned unexpected response. {e.msg}",
                details={"wsfunction": "upload"}
            ) from e
        if isinstance(data, dict) and "error" in data:
            raise MoodleApiError(data["error"], details={
                "wsfunction": "upload",
                "errorcode": data.get("errorcode"),
            })
        return data

    @staticmethod
    def _parse(shape: Union[Type[T], Any], data: Any, wsfunction: str) -> T:
        try:
            return TypeAdapter(shape).validate_python(data)
        except PydanticValidationError as e:
            raise UnexpectedResponseError(
                f"Server returned unexpected response. {e.error_count()} validation error(s)",
                details={"wsfunction": wsfunction, "errors": e.errors(include_url=False, include_input=False)}
            ) from e
