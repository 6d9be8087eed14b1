"""SQLAlchemy models for bizledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    Boolean,
    Enum,
    CheckConstraint,
    UniqueConstraint,
    Table,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

# Money is stored with two decimal places
MONEY = Numeric(14, 2)


class Company(Base):
    """Company (tenant) model."""

    __tablename__ = "companies"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    users = relationship("User", back_populates="company")
    bank_accounts = relationship("BankAccount", back_populates="company")
    projects = relationship("Project", back_populates="company")


class User(Base):
    """User model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=True)
    role = Column(String, default="employee", nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    company = relationship("Company", back_populates="users")


class BankAccount(Base):
    """Bank account model.

    ``current_amount`` is only written at creation and by the ledger's
    balance adjustment.
    """

    __tablename__ = "bank_accounts"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    bank_name = Column(String, nullable=False)
    ifsc_code = Column(String, nullable=False)
    account_number = Column(String, nullable=False)
    account_type = Column(
        Enum("saving", "current", name="account_type", native_enum=False, create_constraint=True),
        nullable=False,
    )
    current_amount = Column(MONEY, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint("company_id", "account_number", name="uq_company_account_number"),
        CheckConstraint("current_amount >= 0", name="ck_bank_accounts_non_negative_balance"),
    )

    # Relationships
    company = relationship("Company", back_populates="bank_accounts")
    transactions = relationship("Transaction", back_populates="bank_account")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    type = Column(
        Enum("income", "expense", name="transaction_type", native_enum=False, create_constraint=True),
        nullable=False,
    )
    amount = Column(MONEY, nullable=False)
    bank_account_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=False)
    category = Column(String, nullable=False)
    color = Column(String, nullable=False)
    department = Column(String, nullable=False, default="All")
    date = Column(DateTime(timezone=True), nullable=False)
    description = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    idempotency_key = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    # NULL keys never collide, so only keyed transactions are deduplicated
    __table_args__ = (
        UniqueConstraint("company_id", "idempotency_key", name="uq_company_idempotency_key"),
        CheckConstraint("amount > 0", name="ck_transactions_positive_amount"),
    )

    # Relationships
    bank_account = relationship("BankAccount", back_populates="transactions", lazy="joined")


# Users staffed on a project besides its head
project_employees = Table(
    "project_employees",
    Base.metadata,
    Column("project_id", Integer, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), primary_key=True),
)


class Project(Base):
    """Client project model."""

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False)
    client_name = Column(String, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    project_head_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    total_revenue = Column(MONEY, nullable=True)
    cost = Column(MONEY, nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        CheckConstraint("total_revenue >= 0", name="ck_projects_non_negative_revenue"),
        CheckConstraint("cost >= 0", name="ck_projects_non_negative_cost"),
    )

    # Relationships
    company = relationship("Company", back_populates="projects")
    employees = relationship("User", secondary=project_employees, order_by="User.id")
    tasks = relationship(
        "Task", back_populates="project", cascade="all, delete-orphan", order_by="Task.id"
    )


class Task(Base):
    """Project task model."""

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    assigned_to_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    status = Column(
        Enum(
            "To Do", "In Progress", "Done",
            name="task_status", native_enum=False, create_constraint=True,
        ),
        nullable=False,
        default="To Do",
    )
    completion_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    project = relationship("Project", back_populates="tasks")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores foreign keys unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
