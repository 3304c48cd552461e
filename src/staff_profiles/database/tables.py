"""ORM tables backing the profile repository."""

from __future__ import annotations

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Integer, String, func
from sqlalchemy.orm import declarative_base, relationship

from ..core.constants import DEFAULT_ACCESS_RIGHT, DEFAULT_POSITION_CODE, PROFILE_TABLE
from ..core.enums import Sex

Base = declarative_base()


class Store(Base):
    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime, nullable=False, default=func.now())

    # One store has many profiles
    profiles = relationship("UserInfo", back_populates="store", lazy="select")

    def __repr__(self) -> str:
        return f"<Store(id={self.id}, name={self.name})>"


class UserInfo(Base):
    """Employee profile row. ``deleted_at`` is the soft-delete marker."""

    __tablename__ = PROFILE_TABLE

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100))
    last_name = Column(String(100))
    sex = Column(Enum(Sex, values_callable=lambda e: [m.value for m in e], native_enum=False, length=10))
    birthday = Column(Date)
    email = Column(String(255), index=True)
    slack_user_id = Column(String(64), unique=True, nullable=True)
    tel = Column(String(32))
    hire_date = Column(Date)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=True)
    access_right = Column(Integer, nullable=False, default=DEFAULT_ACCESS_RIGHT)
    position_name = Column(String(100))
    position_code = Column(Integer, nullable=False, default=DEFAULT_POSITION_CODE)

    created_at = Column(DateTime, nullable=False, default=func.now())
    updated_at = Column(DateTime, nullable=False, default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime, nullable=True)

    store = relationship("Store", back_populates="profiles")
    account = relationship("User", back_populates="user_info", uselist=False)
    admin = relationship("AdminUser", back_populates="user_info", uselist=False)

    def __repr__(self) -> str:
        return f"<UserInfo(id={self.id}, email={self.email}, deleted_at={self.deleted_at})>"


class User(Base):
    """Authentication account linked to a profile."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False)
    user_info_id = Column(Integer, ForeignKey(f"{PROFILE_TABLE}.id"), unique=True, nullable=True)

    user_info = relationship("UserInfo", back_populates="account")


class AdminUser(Base):
    """Admin account linked to a profile."""

    __tablename__ = "admin_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False)
    user_info_id = Column(Integer, ForeignKey(f"{PROFILE_TABLE}.id"), unique=True, nullable=True)

    user_info = relationship("UserInfo", back_populates="admin")
