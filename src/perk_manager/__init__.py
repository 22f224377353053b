"""Perk Manager: share membership perks and vote on them."""
