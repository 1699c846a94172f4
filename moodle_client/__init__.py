"""
Moodle access client.

Wraps a Moodle site's JSON web service API and evaluates course module
access restrictions against a learner's group memberships.

- api: MoodleApi and the models it returns.
- restrictions: Availability rule model, codec and evaluator.
- transport: HTTP fetcher with timeouts, cookie jar and header profile.
- notify: Password reset mails.
- passwords: Random password generation.
- cli: Command line front-end.

Cross-cutting concerns (config, logging, errors, retry, circuit
breaker) live in the top-level shared package.
"""

from .api import MoodleApi
from .restrictions import Restriction, RestrictionOperator, decode_restriction, is_restricted

__all__ = [
    "MoodleApi",
    "Restriction",
    "RestrictionOperator",
    "decode_restriction",
    "is_restricted",
]
