# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Catalog Admin:
# - test_utils.py: Filename sanitizing and storage paths
# - test_models.py: Record models and the per-kind configuration table
# - test_catalog_service.py: Data Access Layer against an in-memory store
# - test_admin_console.py: Operator console workflow
# - test_admin_console_script.py: Terminal front-end rendering and commands
# - test_seed_service.py: Seeding
# - test_supabase_client.py: Supabase adapter with a mocked client
# - test_routes.py: API endpoints via TestClient
#
# Run tests with: pytest
# =============================================================================
