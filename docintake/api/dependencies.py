from typing import Annotated

from fastapi import Header, HTTPException, Request, status

from docintake.processor.processor import Processor


def get_processor(request: Request) -> Processor:
    return request.app.state.processor


def get_owner_id(
    x_owner_id: Annotated[str | None, Header(alias="X-Owner-Id")] = None,
) -> str:
    """Owner identity set by the upstream authentication gateway."""
    if not x_owner_id or not x_owner_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing owner identity",
        )
    return x_owner_id.strip()
