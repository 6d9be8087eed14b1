"""Company and user domain services."""

import logging
import re
from typing import Optional

from bizledger.database.base import Database
from bizledger.domain.entities import Company, Principal, User
from bizledger.domain.errors import (
    ConflictError,
    NoCompanyError,
    NotFoundError,
    ValidationError,
    no_company,
)
from bizledger.utils.id_parser import parse_id

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

DEFAULT_ROLE = "employee"
# Roles that see and manage everything in their company
MANAGER_ROLES = frozenset({"admin", "owner"})


def require_company(principal: Principal) -> int:
    """Return the principal's company ID.

    Raises:
        NoCompanyError: If the principal is not attached to a company
    """
    if principal.company_id is None:
        raise NoCompanyError(no_company(principal.email))
    return principal.company_id


def is_manager(principal: Principal) -> bool:
    return principal.role in MANAGER_ROLES


class CompanyService:
    """Service for managing companies."""

    def __init__(self, db: Database):
        """Initialize company service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_company(self, name: str) -> int:
        """Create a new company.

        Args:
            name: Company name

        Returns:
            Company ID

        Raises:
            ValidationError: If name is blank
            ConflictError: If a company with the same name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Company name is required", {"name": "is required"})
        if self.db.get_company_by_name(name) is not None:
            raise ConflictError(f"Company '{name}' already exists")

        company_id = self.db.create_company(name)
        logger.info("Created company %s (%s)", company_id, name)
        return company_id

    def get_company(self, company_id: int) -> Optional[Company]:
        return self.db.get_company(company_id)

    def resolve_company(self, company: str | int) -> Company:
        """Resolve a company name or ID.

        Raises:
            NotFoundError: If no such company exists
        """
        try:
            found = self.db.get_company(parse_id(company))
        except ValueError:
            found = None
        if found is None:
            found = self.db.get_company_by_name(str(company))
        if found is None:
            raise NotFoundError(f"Company '{company}' not found")
        return found

    def list_companies(self) -> list[Company]:
        return self.db.list_companies()


class UserService:
    """Service for managing users and their company membership."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_user(
        self,
        email: str,
        name: Optional[str] = None,
        role: str = DEFAULT_ROLE,
        company_id: Optional[int] = None,
    ) -> int:
        """Create a new user.

        Args:
            email: Email address, stored lower-case
            name: Optional display name
            role: Role name
            company_id: Optional company to attach the user to

        Returns:
            User ID

        Raises:
            ValidationError: If email is malformed or company doesn't exist
            ConflictError: If a user with the same email exists
        """
        email = (email or "").strip().lower()
        if not EMAIL_RE.match(email):
            raise ValidationError(f"Invalid email '{email}'", {"email": "must be a valid email"})
        if self.db.get_user_by_email(email) is not None:
            raise ConflictError(f"User '{email}' already exists")
        if company_id is not None and self.db.get_company(company_id) is None:
            raise ValidationError(
                f"Company {company_id} not found", {"companyId": "does not exist"}
            )

        user_id = self.db.create_user(
            email=email, name=name, role=role or DEFAULT_ROLE, company_id=company_id
        )
        logger.info("Created user %s (%s)", user_id, email)
        return user_id

    def get_user_by_email(self, email: str) -> User:
        """Get a user by email.

        Raises:
            NotFoundError: If no such user exists
        """
        user = self.db.get_user_by_email((email or "").strip().lower())
        if user is None:
            raise NotFoundError(f"User '{email}' not found")
        return user

    def assign_company(self, user_id: int, company_id: int) -> None:
        """Attach a user to a company.

        Raises:
            NotFoundError: If user or company doesn't exist
        """
        if self.db.get_company(company_id) is None:
            raise NotFoundError(f"Company {company_id} not found")
        self.db.set_user_company(user_id, company_id)
        logger.info("Assigned user %s to company %s", user_id, company_id)

    def get_profile(self, principal: Principal) -> User:
        """Return the caller's own user record."""
        user = self.db.get_user(principal.id)
        if user is None:
            raise NotFoundError(f"User '{principal.email}' not found")
        return user

    def list_team(self, principal: Principal) -> list[User]:
        """List the users of the caller's company."""
        return self.db.list_users(require_company(principal))

    def principal_for(self, email: str) -> Principal:
        """Build a principal for a user, as the CLI acts on a user's behalf."""
        user = self.get_user_by_email(email)
        return Principal(
            id=user.id, email=user.email, role=user.role, company_id=user.company_id
        )
