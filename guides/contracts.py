"""
Smart contract addresses per chain.

This is exact key lookup, not fuzzy search: a wrong chain or contract name
gets a "not found" answer listing the valid keys, and an address missing for
the requested network is reported as unavailable, never borrowed from the
other network.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from corpus import ChainContracts, ContractInfo, ContractRegistry
from guides.common import capitalize

NETWORKS = ("mainnet", "testnet")

CHAIN_ALIASES = {
    "bnb": "bsc",
    "binance": "bsc",
    "bnb chain": "bsc",
    "eth": "ethereum",
    "arb": "arbitrum",
    "op": "optimism",
    "matic": "polygon",
    "sol": "solana",
}


class Contracts:
    def __init__(self, registry: ContractRegistry):
        self.registry = registry

    def chains(self) -> List[str]:
        return self.registry.chains()

    def all_contracts(self) -> Dict[str, Any]:
        """The whole registry as plain JSON-ready data."""
        return self.registry.model_dump(exclude_none=True)

    def find_chain(self, chain: str) -> Tuple[Optional[str], Optional[ChainContracts]]:
        wanted = (chain or "").strip().lower()
        wanted = CHAIN_ALIASES.get(wanted, wanted)
        for name, data in self.registry.root.items():
            if name.lower() == wanted:
                return name, data
        return None, None

    @staticmethod
    def find_contract(chain: ChainContracts, key: str) -> Tuple[Optional[str], Optional[ContractInfo]]:
        wanted = (key or "").strip().lower()
        for name, info in chain.contracts.items():
            if name.lower() == wanted:
                return name, info
        return None, None

    # ------------------------------------------------------------------
    def get_contract(self, chain: str, contract_key: str = "all", network: str = "mainnet") -> str:
        net = (network or "").strip().lower()
        if net not in NETWORKS:
            return f"Invalid network: {network}. Must be 'mainnet' or 'testnet'."

        chain_name, data = self.find_chain(chain)
        if data is None:
            return f'Chain "{chain}" not found. Available chains: {", ".join(self.chains())}'

        key = (contract_key or "all").strip()
        text = f"# {capitalize(chain_name)} Contract Addresses\n\n"
        text += f"**Chain ID:** {data.chain_id(net) or 'N/A'}\n\n"

        if key.lower() == "all":
            text += f"## All Contracts ({net})\n\n"
            listed = 0
            for name, info in data.contracts.items():
                address = info.address(net)
                if not address:
                    continue
                listed += 1
                text += f"### {name}\n"
                if info.description:
                    text += f"{info.description}\n\n"
                text += f"**Address:** `{address}`\n\n"
            if not listed:
                text += f"No {net} addresses are configured for {chain_name}.\n"
            return text

        name, info = self.find_contract(data, key)
        if info is None:
            available = ", ".join(data.contracts.keys())
            return f'Contract type "{contract_key}" not found on {chain_name}. Available types: {available}'

        text += f"## {name}\n\n"
        if info.description:
            text += f"{info.description}\n\n"

        address = info.address(net)
        if address:
            text += f"**{net} Address:** `{address}`\n\n"
        else:
            text += f"**{net} Address:** Not available\n\n"

        other = "testnet" if net == "mainnet" else "mainnet"
        other_address = info.address(other)
        if address and other_address:
            text += "### Other Networks\n"
            text += f"- **{capitalize(other)}:** `{other_address}`\n"
        return text
