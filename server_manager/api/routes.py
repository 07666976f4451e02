"""
API route definitions for the update trigger.
"""

import logging
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from ..managers.update_runner import UpdateRunner, UpdateError, UpdateInProgressError
from .schemas import UpdateResult, UpdateRunInfo, UpdateStatusResponse

logger = logging.getLogger(__name__)
router = APIRouter()

SUCCESS_MESSAGE = "System updated successfully"
FAILURE_MESSAGE = "Update failed"
IN_PROGRESS_MESSAGE = "Update already in progress"


def get_update_runner(request: Request) -> UpdateRunner:
    """Dependency function to get the update runner of the serving app (set by main.create_app)."""
    runner = getattr(request.app.state, "update_runner", None)
    if runner is None:
        raise RuntimeError("Update runner not initialized")
    return runner


def _failure(status_code: int, message: str, error: str) -> JSONResponse:
    body = UpdateResult(success=False, message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.dict(exclude_none=True))


@router.post("/update", response_model=UpdateResult, response_model_exclude_none=True,
             summary="Run the system update script",
             responses={409: {"model": UpdateResult}, 500: {"model": UpdateResult}})
def trigger_update(runner: UpdateRunner = Depends(get_update_runner)):
    """
    Run the configured system update script and wait for it to finish.

    No request body is read. The call blocks until the script exits.

    **Returns:**
    - 200 with the script's stdout in `details` when it exits 0
    - 500 with `error` when it cannot be started, times out or exits non-zero
    - 409 when another update is still running (reject policy)
    """
    try:
        output = runner.run()
    except UpdateInProgressError as e:
        return _failure(status.HTTP_409_CONFLICT, IN_PROGRESS_MESSAGE, str(e))
    except UpdateError as e:
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, FAILURE_MESSAGE, str(e))
    except Exception as e:
        logger.exception("Unexpected error while running update")
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, FAILURE_MESSAGE, str(e))

    return UpdateResult(success=True, message=SUCCESS_MESSAGE, details=output.stdout)


@router.get("/update/status", response_model=UpdateStatusResponse,
            summary="Get the state of the update runner")
async def get_update_status(runner: UpdateRunner = Depends(get_update_runner)):
    """
    Report whether an update is running and how the last one ended.

    The record lives in memory and is lost when the service restarts.
    """
    last_run = runner.last_run
    return UpdateStatusResponse(
        in_progress=runner.in_progress,
        last_run=UpdateRunInfo(**last_run.to_dict()) if last_run else None,
    )
