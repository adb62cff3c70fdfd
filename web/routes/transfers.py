"""
이체 라우트

계좌 간 이체 API. 이체 1건은 항상 연결된 거래 2건과 함께 반영된다.
"""

from fastapi import APIRouter, Depends, Response

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger import TransferCoordinator
from web.dependencies import CurrentUser, get_current_user, get_db, get_db_write
from web.models.requests import TransferRequest
from web.models.responses import ErrorResponse, TransferResponse

router = APIRouter(
    prefix="/transfers",
    tags=["Transfers"],
    responses={
        400: {"model": ErrorResponse, "description": "검증 실패"},
        403: {"model": ErrorResponse, "description": "Não autorizado"},
    },
)


@router.get("", response_model=list[TransferResponse])
async def list_transfers(
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """요청 사용자 이체 목록"""
    transfers = await TransferCoordinator(db).list(user.id)
    return [t.to_dict() for t in transfers]


@router.post("", response_model=TransferResponse, status_code=201)
async def create_transfer(
    request: TransferRequest,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """이체 생성

    원 계좌에 지출 거래(-금액), 대상 계좌에 수입 거래(+금액)를
    이체와 함께 하나의 작업 단위로 기록한다.
    """
    transfer = await TransferCoordinator(db).create(user.id, request.to_draft())
    return transfer.to_dict()


@router.get("/{transfer_id}", response_model=TransferResponse)
async def get_transfer(
    transfer_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db),
):
    """이체 조회

    존재하지 않거나 다른 사용자 이체면 403.
    """
    transfer = await TransferCoordinator(db).get_by_id(user.id, transfer_id)
    return transfer.to_dict()


@router.put("/{transfer_id}", response_model=TransferResponse)
async def update_transfer(
    transfer_id: int,
    request: TransferRequest,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
):
    """이체 수정 (연결된 거래 2건도 함께 재작성)"""
    transfer = await TransferCoordinator(db).update(
        user.id, transfer_id, request.to_draft()
    )
    return transfer.to_dict()


@router.delete("/{transfer_id}", status_code=204)
async def delete_transfer(
    transfer_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: SQLiteAdapter = Depends(get_db_write),
) -> Response:
    """이체 삭제 (연결된 거래 2건 포함)"""
    await TransferCoordinator(db).delete(user.id, transfer_id)
    return Response(status_code=204)
