"""
Shared pytest fixtures for the registration bot tests.

Sets required environment variables BEFORE any funrun module is imported so
that pydantic-settings initialisation uses safe test values.
"""
from __future__ import annotations

import os

# ── Set env vars before any funrun import ─────────────────────────────────────
os.environ.setdefault("BOT_TOKEN", "test-token-for-pytest")
os.environ.setdefault("EVENT_NAME", "Fun Run Test 2025")

# ── Third-party ───────────────────────────────────────────────────────────────
import pytest
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage

# ── Funrun imports (safe after env vars are set) ──────────────────────────────
from funrun.models.models import RegistrationDraft


# A draft that passes every step; tests blank or override single fields
COMPLETE_ANSWERS: dict[str, str] = {
    "email":                "runner@example.com",
    "registering_for":      "self",
    "full_name":            "Budi Santoso",
    "birth_date":           "1995-04-12",
    "gender":               "male",
    "address":              "Jl. Merdeka No. 1, Bandung",
    "id_number":            "3273010101950001",
    "bib_name":             "BUDI",
    "registered_from":      "community",
    "registered_from_name": "Bandung Runners",
    "info_source":          "social",
    "blood_type":           "O",
    "chronic_disease":      "no",
    "under_care":           "no",
    "medication":           "no",
    "complications":        "no",
    "emergency_contact":    "+62812345678",
    "jersey_size":          "L",
    "category":             "student",
}


def _make_draft(**overrides: str) -> RegistrationDraft:
    return RegistrationDraft(**{**COMPLETE_ANSWERS, **overrides})


@pytest.fixture
def make_draft():
    """Factory fixture - complete draft with optional field overrides."""
    return _make_draft


@pytest.fixture
def complete_draft() -> RegistrationDraft:
    return _make_draft()


# ── FSM fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def fsm_context() -> FSMContext:
    """FSMContext for a single private chat backed by a fresh MemoryStorage."""
    return FSMContext(
        storage=MemoryStorage(),
        key=StorageKey(bot_id=1, chat_id=4242, user_id=4242),
    )
