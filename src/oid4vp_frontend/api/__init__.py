"""API layer - FastAPI adapter over the use cases"""
