# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, lifespan (shared clients), CORS, error handlers
# - config.py: Environment variable loading and settings
# - dependencies.py: Depends() providers for the shared components
# - exceptions.py: Error taxonomy and the JSON error handler
# - routers/: The GET / playlists endpoint
#
# The app layer is thin - it handles HTTP concerns and delegates
# enrichment to the core/ package and I/O to lib/.
# =============================================================================
