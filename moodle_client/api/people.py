"""
Account lookup and maintenance.
"""

from typing import List, Optional

from shared.errors import AmbiguousMatchError, ConfigurationError, NotFoundError, UnexpectedResponseError, ValidationError
from moodle_client.notify import MailTemplate, WELCOME
from moodle_client.passwords import random_password
from .base import UPLOAD_PATH
from .models import Person
from .wire import CreatedUserWire, PictureUpdateWire, UploadedFileWire, UserSearchWire, UserWire


def person_from_wire(user: UserWire) -> Person:
    person = Person(
        moodle_id=user.id,
        username=user.username,
        email=user.email,
        first_name=user.firstname,
        last_name=user.lastname,
        profile_image_url=user.profileimageurl,
    )
    for custom in user.customfields:
        if custom.shortname == "alphacrucisid":
            person.alphacrucis_id = custom.value or ""
        if custom.shortname == "personalemail":
            person.personal_email = custom.value or ""
    return person


def _single(people: List[Person], what: str) -> Optional[Person]:
    if not people:
        return None
    if len(people) == 1:
        return people[0]
    raise AmbiguousMatchError(
        f"Multiple moodle accounts match this {what}",
        details={"matches": [p.moodle_id for p in people]}
    )


class PeopleMixin:
    """Web service calls about user accounts."""

    async def _get_people_by_field(self, field: str, value) -> List[Person]:
        users = await self._call_parsed(
            "core_user_get_users_by_field", List[UserWire],
            [("field", field), ("values[0]", value)]
        )
        return [person_from_wire(u) for u in users]

    async def get_person_by_username(self, username: str) -> Optional[Person]:
        """Account matching ``username``; None if not found."""
        return _single(await self._get_people_by_field("username", username), "username")

    async def get_person_by_moodle_id(self, moodle_id: int) -> Optional[Person]:
        """Account with the given id; None if not found."""
        return _single(await self._get_people_by_field("id", moodle_id), "id")

    async def get_person_by_email(self, email: str) -> Optional[Person]:
        """Account matching ``email``; None if not found."""
        return _single(await self._get_people_by_field("email", email), "email address")

    async def get_people_by_attribute(self, attribute: str, value: str) -> List[Person]:
        """Search accounts, e.g. ``get_people_by_attribute("email", "%@example.com")``."""
        result = await self._call_parsed(
            "core_user_get_users", UserSearchWire,
            [("criteria[0][key]", attribute), ("criteria[0][value]", value)]
        )
        return [person_from_wire(u) for u in result.users]

    async def get_people_by_first_name_last_name(self, first_name: str, last_name: str) -> List[Person]:
        """Accounts whose names equal the given names, ignoring case."""
        result = await self._call_parsed(
            "core_user_get_users", UserSearchWire,
            [
                ("criteria[0][key]", "firstname"), ("criteria[0][value]", first_name),
                ("criteria[1][key]", "lastname"), ("criteria[1][value]", last_name),
            ]
        )
        return [
            person_from_wire(u) for u in result.users
            if u.firstname.lower() == first_name.lower() and u.lastname.lower() == last_name.lower()
        ]

    async def add_user(self, first_name: str, last_name: str, email: str, username: str,
                       password: str = "") -> int:
        """Create an account and return its id.

        Without a password Moodle generates one and mails it to the user.
        """
        if "@" not in email:
            raise ValidationError("Invalid email address", details={"email": email})

        params = [
            ("users[0][firstname]", first_name),
            ("users[0][lastname]", last_name),
            ("users[0][email]", email),
            ("users[0][username]", username),
        ]
        if password:
            params.append(("users[0][password]", password))
        else:
            params.append(("users[0][createpassword]", 1))

        created = await self._call_parsed("core_user_create_users", List[CreatedUserWire], params)
        if len(created) != 1:
            raise UnexpectedResponseError(
                "Server returned unexpected response. Expected one created account",
                details={"created": len(created)}
            )
        self.logger.info("Moodle account created", moodle_id=created[0].id, username=username)
        return created[0].id

    async def update_user(self, moodle_id: int, first_name: str, last_name: str, email: str,
                          username: str, password: str = "") -> None:
        """Overwrite an account's names, email and username, and optionally its password."""
        if "@" not in email:
            raise ValidationError("Invalid email address", details={"email": email})

        params = [
            ("users[0][id]", moodle_id),
            ("users[0][firstname]", first_name),
            ("users[0][lastname]", last_name),
            ("users[0][email]", email),
            ("users[0][username]", username),
        ]
        if password:
            params.append(("users[0][password]", password))
        await self._call_acknowledged("core_user_update_users", params)

    async def set_user_attribute(self, moodle_id: int, attribute: str, value: str) -> None:
        await self._call_acknowledged(
            "core_user_update_users",
            [("users[0][id]", moodle_id), (f"users[0][{attribute}]", value)]
        )

    async def set_user_custom_field(self, moodle_id: int, field: str, value: str) -> None:
        await self._call_acknowledged(
            "core_user_update_users",
            [
                ("users[0][id]", moodle_id),
                ("users[0][customfields][0][type]", field),
                ("users[0][customfields][0][value]", value),
            ]
        )

    async def reset_password(self, moodle_id: int, password: str) -> None:
        """Set an account's password. It must satisfy the site's password policy."""
        await self._call_acknowledged(
            "core_user_update_users",
            [("users[0][id]", moodle_id), ("users[0][password]", password)]
        )

    async def reset_password_with_email(self, email: str, template: MailTemplate = WELCOME) -> Person:
        """Reset an account's password to a random one and mail it to the owner."""
        if self.mailer is None:
            raise ConfigurationError("reset_password_with_email() requires smtp settings")
        self.mailer.settings.validate()

        person = await self.get_person_by_email(email)
        if person is None:
            raise NotFoundError("Email address not found in moodle", details={"email": email})

        password = random_password()
        try:
            await self.reset_password(person.moodle_id, password)
        except UnexpectedResponseError as e:
            raise UnexpectedResponseError(f"Password Reset failed. {e.message}", details=e.details) from e

        await self.mailer.send_password(person, password, site_url=self.base, template=template)
        self.logger.info("Password reset mailed", moodle_id=person.moodle_id)
        return person

    async def set_profile_picture(self, moodle_id: int, content: bytes, filename: str = "profile.jpg") -> Optional[str]:
        """Upload an image and make it the account's profile picture. Returns the new image URL."""
        result = await self.fetcher.post(
            f"{self.base}{UPLOAD_PATH}",
            data={"token": self.token, "filearea": "draft", "itemid": "0"},
            files={"file_1": (filename, content)},
        )
        data = self._parse_upload(result.body)
        uploaded = self._parse(List[UploadedFileWire], data, "upload")
        if not uploaded:
            raise UnexpectedResponseError("Upload returned no files")

        picture = await self._call_parsed(
            "core_user_update_picture", PictureUpdateWire,
            [("draftitemid", uploaded[0].itemid), ("userid", moodle_id)]
        )
        if not picture.success:
            raise UnexpectedResponseError("Profile picture was not updated", details={"moodle_id": moodle_id})
        return picture.profileimageurl
