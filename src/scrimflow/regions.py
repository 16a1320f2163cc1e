"""
scrimflow.regions — Competitive regions
=======================================

Region keys accepted by REGISTER, SCRIM_OPEN and PING. The endpoint of
each region is the host PING resolves to estimate latency.
"""

from typing import Dict, TypedDict


class RegionInfo(TypedDict):
    """Display data for one competitive region."""
    name: str
    endpoint: str
    emoji: str


COMPETITIVE_REGIONS: Dict[str, RegionInfo] = {
    "EU": {
        "name": "Europe",
        "endpoint": "ec2.eu-west-1.amazonaws.com",
        "emoji": "🇪🇺",
    },
    "NA-East": {
        "name": "North America East",
        "endpoint": "ec2.us-east-1.amazonaws.com",
        "emoji": "🇺🇸",
    },
    "NA-West": {
        "name": "North America West",
        "endpoint": "ec2.us-west-2.amazonaws.com",
        "emoji": "🌴",
    },
    "ME-South": {
        "name": "Middle East",
        "endpoint": "ec2.me-south-1.amazonaws.com",
        "emoji": "🏜️",
    },
    "OCE": {
        "name": "Oceania",
        "endpoint": "ec2.ap-southeast-2.amazonaws.com",
        "emoji": "🦘",
    },
    "ASIA": {
        "name": "Asia Pacific",
        "endpoint": "ec2.ap-northeast-1.amazonaws.com",
        "emoji": "🌏",
    },
    "BR": {
        "name": "Brazil",
        "endpoint": "ec2.sa-east-1.amazonaws.com",
        "emoji": "🇧🇷",
    },
}


def region_name(key: str) -> str:
    """Display name for a region key; unknown keys are returned unchanged."""
    info = COMPETITIVE_REGIONS.get(key)
    return info["name"] if info else key
