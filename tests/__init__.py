# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the playlists API:
# - test_models.py: Playlist / Video model parsing and serialization
# - test_tracing.py: B3 propagation and span lifecycle
# - test_playlist_store.py: Fail-open Redis reads
# - test_videos_client.py: videos-api requests and error split
# - test_aggregator.py: Enrichment order and truncation
# - test_playlists_api.py: GET / end to end, CORS, error responses
#
# Run tests with: pytest
# =============================================================================
