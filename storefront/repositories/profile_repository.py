"""
Profile Repository - Data Access Layer for profiles and admin_staff

Author: JRadiance
Date: 2026-02-09
"""
from typing import List, Optional

from storefront.domain.user import AdminStaff, Profile, UserRole
from storefront.repositories.base import SupabaseRepository

PROFILE_COLUMNS = "id, email, full_name, role, is_active, created_at"


class ProfileRepository(SupabaseRepository):
    """
    Repository for the profiles table

    The profiles row is the only source of a user's storefront role.
    """

    table_name = "profiles"

    def get_role(self, user_id: str) -> Optional[str]:
        """Raw role value for a user, or None when the profile is missing"""
        row = self._one(
            self._table().select("role").eq("id", user_id).maybe_single().execute()
        )
        return row.get("role") if row else None

    def find_by_id(self, user_id: str) -> Optional[Profile]:
        row = self._one(
            self._table().select(PROFILE_COLUMNS).eq("id", user_id).maybe_single().execute()
        )
        return Profile(**row) if row else None

    def find_all(self) -> List[Profile]:
        """All profiles, newest first"""
        response = (
            self._table()
            .select(PROFILE_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return [Profile(**row) for row in self._rows(response)]

    def find_by_role(self, role: UserRole) -> List[Profile]:
        response = (
            self._table()
            .select(PROFILE_COLUMNS)
            .eq("role", role.value)
            .order("created_at", desc=True)
            .execute()
        )
        return [Profile(**row) for row in self._rows(response)]

    def update_role(self, user_id: str, role: UserRole) -> None:
        self._table().update({"role": role.value}).eq("id", user_id).execute()

    def set_active(self, user_id: str, is_active: bool) -> None:
        self._table().update({"is_active": is_active}).eq("id", user_id).execute()

    def delete(self, user_id: str) -> None:
        self._table().delete().eq("id", user_id).execute()


class StaffRepository(SupabaseRepository):
    """Repository for admin_staff rows (one per promoted profile)"""

    table_name = "admin_staff"

    def find_id(self, user_id: str) -> Optional[str]:
        row = self._one(
            self._table().select("id").eq("id", user_id).maybe_single().execute()
        )
        return row.get("id") if row else None

    def insert(self, staff: AdminStaff) -> None:
        """Raises postgrest APIError (code 23505) when the row already exists"""
        self._table().insert(staff.model_dump()).execute()

    def delete(self, user_id: str) -> None:
        self._table().delete().eq("id", user_id).execute()
