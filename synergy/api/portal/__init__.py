"""Inner-source portal endpoints backed by the active provider."""
