"""FastAPI dependency injection configuration."""

from typing import Annotated

from fastapi import Depends, Request

from slp_admin.services.supabase_service import SupabaseClient


def get_supabase(request: Request) -> SupabaseClient:
    """Returns the Supabase client opened by the application lifespan."""
    return request.app.state.supabase


SupabaseDep = Annotated[SupabaseClient, Depends(get_supabase)]
