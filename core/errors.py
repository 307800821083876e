# core/errors.py


class AuthenticationError(Exception):
    """Sign-in / sign-up rejected by the Session Store (or the profile fetch after it)."""


class RepositoryError(Exception):
    """A Profile Repository call failed."""

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation}: {detail}")


class RecordNotFound(RepositoryError):
    def __init__(self, table: str, record_id: str):
        super().__init__(f"Fetch {table}", f"{record_id} not found")
        self.table = table
        self.record_id = record_id


def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Case 1: Supabase Auth / GoTrue / PostgREST errors
    if hasattr(error, "message"):
        try:
            return str(error.message)
        except Exception:
            pass

    # Case 2: Supabase errors with args (common)
    if hasattr(error, "args") and error.args:
        try:
            return str(error.args[0])
        except Exception:
            pass

    # Case 3: Plain string fallback
    try:
        return str(error)
    except Exception:
        return "Unknown Supabase error"


def describe_repository_error(error: RepositoryError) -> str:
    """
    User-facing wording for a failed repository call.
    Mirrors the constraint messages PostgREST returns.
    """
    detail = error.detail.lower()
    if "duplicate" in detail or "unique" in detail:
        return "A record with these details already exists."
    if "foreign key" in detail:
        return "The record refers to something that no longer exists."
    if "not found" in detail or "does not exist" in detail:
        return "The requested record could not be found."
    if "row-level security" in detail or "permission denied" in detail:
        return "You do not have permission to change this record."
    return "Please try again later."
