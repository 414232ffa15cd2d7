# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides an in-memory row store and sample rows
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from tests.fakes import InMemoryRowStore


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """Empty in-memory row store."""
    return InMemoryRowStore()


@pytest.fixture
def sample_quote_row():
    """A quotes row as the store returns it."""
    return {
        "id": "quote-123",
        "created_at": "2024-01-15T10:30:00+00:00",
        "last_downloaded": None,
        "category": "Motivação",
        "quote": "O sucesso é a soma de pequenos esforços.",
        "author_name": "Robert Collier",
        "author_role": "Escritor",
        "author_image": "https://test-project.supabase.co/storage/v1/object/public/images/authors/1_collier.png",
        "author_image_offset_x": 4,
        "author_image_offset_y": "-12",
        "social_handle": "@metarhconsultoria",
        "footer_logo_url": None,
        "website_url": "www.metarh.com.br",
        "caption": None,
    }


@pytest.fixture
def sample_book_row():
    """A books row as the store returns it."""
    return {
        "id": "book-456",
        "created_at": "2024-01-16T09:00:00+00:00",
        "last_downloaded": "2024-02-01T12:00:00+00:00",
        "category": "Liderança",
        "book_title": "Líderes se Servem por Último",
        "book_author": "Simon Sinek",
        "cover_image": "",
        "review": "Sobre confiança em equipes.",
        "social_handle": "@metarhconsultoria",
        "footer_logo_url": "",
        "caption": "Leitura da semana",
    }


@pytest.fixture
def sample_job_row():
    """A jobs row as the store returns it."""
    return {
        "id": "job-789",
        "created_at": "2024-01-17T08:00:00+00:00",
        "last_downloaded": None,
        "job_title": "Analista de RH Pleno",
        "tagline": "Venha crescer com a gente",
        "sector": "Recursos Humanos",
        "job_code": "RH-2024-017",
        "contract_type": "CLT",
        "modality": "Híbrido",
        "location": "São Paulo - SP",
        "image_url": None,
        "footer_logo_url": None,
        "website_url": "www.metarh.com.br",
        "caption": None,
    }
