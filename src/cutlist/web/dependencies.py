"""FastAPI dependency injection for cut list services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from cutlist.application import CutListWorker, GenerateCutListCommand, ValidatePartsCommand


@lru_cache(maxsize=1)
def get_worker() -> CutListWorker:
    """Get the shared generation worker pool."""
    return CutListWorker(max_workers=2)


def get_generate_command(
    worker: Annotated[CutListWorker, Depends(get_worker)],
) -> GenerateCutListCommand:
    """Dependency for GenerateCutListCommand running on the worker pool."""
    return GenerateCutListCommand(worker=worker)


def get_validate_command() -> ValidatePartsCommand:
    """Dependency for ValidatePartsCommand."""
    return ValidatePartsCommand()


def shutdown_worker() -> None:
    """Release the worker pool if one was created."""
    if get_worker.cache_info().currsize:
        get_worker().shutdown(wait=False)
        get_worker.cache_clear()


# Type aliases for cleaner endpoint signatures
GenerateCommandDep = Annotated[GenerateCutListCommand, Depends(get_generate_command)]
ValidateCommandDep = Annotated[ValidatePartsCommand, Depends(get_validate_command)]
