# storefront/services/access_gate.py
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from storefront.domain.errors import Unauthorized
from storefront.services.revocation import NeverRevoked, RevocationList
from storefront.services.token_service import Identity, TokenService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ANY_METHOD = frozenset()


class Policy(str, Enum):
    PUBLIC = "public"
    GUARDED = "guarded"
    DENY = "deny"


class Outcome(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    #trasa wymaga tokena, a go brak albo jest zly
    DENY_WITH_IDENTITY = "deny_with_identity"


@dataclass(frozen=True)
class AccessRule:
    methods: frozenset
    pattern: str
    policy: Policy
    _regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_regex", re.compile(self.pattern))

    def matches(self, method: str, path: str) -> bool:
        if self.methods and method not in self.methods:
            return False
        return self._regex.fullmatch(path) is not None


@dataclass(frozen=True)
class Decision:
    outcome: Outcome
    identity: Identity | None = None
    reason: str | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome is Outcome.ALLOW


def rule(methods: Iterable[str] | None, pattern: str, policy: Policy = Policy.PUBLIC) -> AccessRule:
    return AccessRule(
        methods=frozenset(m.upper() for m in methods) if methods else ANY_METHOD,
        pattern=pattern,
        policy=policy,
    )


def default_rules(api_url: str) -> list[AccessRule]:
    """Trasy omijajace weryfikacje tokena. Wszystko inne jest GUARDED."""
    api = re.escape(api_url.rstrip("/"))
    read = ("GET", "HEAD", "OPTIONS")

    return [
        #preflight CORS nigdy nie niesie Authorization
        rule(["OPTIONS"], r"/.*"),
        rule(read, rf"{api}/products(/.*)?"),
        rule(read, rf"{api}/collections(/.*)?"),
        rule(read, rf"{api}/search(/.*)?"),
        rule(read, r"/public/uploads(/.*)?"),
        rule(read, r"/uploads(/.*)?"),
        rule(["POST"], rf"{api}/users/(login|register)"),
        rule(["POST"], rf"{api}/auth/(login|register|google)"),
        rule(read, r"/health"),
        rule(read, r"/(docs|redoc)(/.*)?"),
        rule(read, r"/openapi\.json"),
    ]


def parse_bearer(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class AccessGate:
    """
    Decyzja per request: (metoda, sciezka, token) -> ALLOW / DENY / DENY_WITH_IDENTITY.
    Reguly sa danymi, pierwsza pasujaca wygrywa, domyslnie GUARDED.
    """

    def __init__(
        self,
        rules: list[AccessRule],
        token_service: TokenService,
        revocation: RevocationList | None = None,
        default_policy: Policy = Policy.GUARDED,
    ):
        self.rules = list(rules)
        self.token_service = token_service
        self.revocation = revocation or NeverRevoked()
        self.default_policy = default_policy

    def policy_for(self, method: str, path: str) -> Policy:
        method = method.upper()
        for r in self.rules:
            if r.matches(method, path):
                return r.policy
        return self.default_policy

    def evaluate(self, method: str, path: str, authorization: str | None = None) -> Decision:
        policy = self.policy_for(method, path)

        if policy is Policy.PUBLIC:
            return Decision(Outcome.ALLOW)

        if policy is Policy.DENY:
            return Decision(Outcome.DENY, reason="Route is not available")

        token = parse_bearer(authorization)
        if token is None:
            return Decision(Outcome.DENY_WITH_IDENTITY, reason="Invalid token or no token provided")

        try:
            identity = self.token_service.verify(token)
        except Unauthorized as e:
            return Decision(Outcome.DENY_WITH_IDENTITY, reason=e.message)

        if self.revocation.is_revoked(identity.token_id):
            logger.info(f"Revoked token {identity.token_id} used by user {identity.subject_id}")
            return Decision(Outcome.DENY_WITH_IDENTITY, reason="Token has been revoked")

        return Decision(Outcome.ALLOW, identity=identity)
