"""API endpoints for the web interface."""

from fastapi import APIRouter, Depends, HTTPException
from web3 import Web3

from ..services.committee_service import CommitteeService

router = APIRouter()


def get_service(network: str) -> CommitteeService:
    return CommitteeService(network)


def require_address(address: str) -> str:
    if not Web3.is_address(address):
        raise HTTPException(status_code=400, detail="Invalid address format")
    return address


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@router.get("/{network}/members")
async def list_members(operators: bool = False, service: CommitteeService = Depends(get_service)):
    """Occupied committee seats, optionally with operator manager links."""
    members = await service.scan_committee(operators)
    return {
        "network": service.network,
        "member_count": len(members),
        "members": [m.model_dump() for m in members],
    }


@router.get("/{network}/members/count")
async def member_count(service: CommitteeService = Depends(get_service)):
    return {"network": service.network, "count": await service.get_member_count()}


@router.get("/{network}/staking")
async def staking_info(operators: bool = False, service: CommitteeService = Depends(get_service)):
    """Staking and activity reward state for every member."""
    info = await service.get_staking_directory(operators)
    return {
        "network": service.network,
        "member_count": len(info),
        "members": [s.model_dump() for s in info],
    }


@router.get("/{network}/membership/{address}")
async def membership(address: str, service: CommitteeService = Depends(get_service)):
    require_address(address)
    return {
        "network": service.network,
        "address": address,
        "is_member": await service.check_membership(address),
    }


@router.get("/{network}/challenge/{seat_index}/{challenger}")
async def challenge_info(
    seat_index: int, challenger: str, service: CommitteeService = Depends(get_service)
):
    """
    Challenge eligibility for a seat.

    Ineligibility is a normal answer (can_challenge=false with a reason),
    not an HTTP error.
    """
    require_address(challenger)
    info = await service.evaluate_challenge(seat_index, challenger)
    return {"network": service.network, "seat_index": seat_index, **info.model_dump()}


@router.get("/{network}/activity-reward/{candidate_contract}")
async def activity_reward(candidate_contract: str, service: CommitteeService = Depends(get_service)):
    require_address(candidate_contract)
    result = await service.resolve_activity_reward(candidate_contract)
    return {"network": service.network, **result.model_dump()}
