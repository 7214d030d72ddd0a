"""Minimal ABIs for the view functions the dashboard reads."""


def _view(name: str, inputs: list[tuple[str, str]], outputs: list[tuple[str, str]]) -> dict:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "view",
        "inputs": [{"name": n, "type": t} for n, t in inputs],
        "outputs": [{"name": n, "type": t} for n, t in outputs],
    }


DAO_COMMITTEE_ABI = [
    _view("maxMember", [], [("", "uint256")]),
    _view("members", [("", "uint256")], [("", "address")]),
    _view(
        "candidateInfos",
        [("", "address")],
        [
            ("candidateContract", "address"),
            ("indexMembers", "uint256"),
            ("memberJoinedTime", "uint128"),
            ("rewardPeriod", "uint128"),
            ("claimedTimestamp", "uint128"),
        ],
    ),
    _view("getClaimableActivityReward", [("_candidate", "address")], [("", "uint256")]),
]

DAO_CANDIDATE_ABI = [
    _view("candidate", [], [("", "address")]),
    _view("memo", [], [("", "string")]),
    _view("totalStaked", [], [("totalsupply", "uint256")]),
]

SEIG_MANAGER_ABI = [
    _view("lastCommitBlock", [("layer2", "address")], [("", "uint256")]),
    _view("minimumAmount", [], [("", "uint256")]),
]

LAYER2_MANAGER_ABI = [
    _view("operatorOfLayer", [("layer2", "address")], [("", "address")]),
]

OPERATOR_MANAGER_ABI = [
    _view("manager", [], [("", "address")]),
]

# ReadRequest.abi -> ABI
ABIS = {
    "committee": DAO_COMMITTEE_ABI,
    "candidate": DAO_CANDIDATE_ABI,
    "seig_manager": SEIG_MANAGER_ABI,
    "layer2_manager": LAYER2_MANAGER_ABI,
    "operator_manager": OPERATOR_MANAGER_ABI,
}

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
