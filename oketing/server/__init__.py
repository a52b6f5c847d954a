"""FastAPI surface for the Oketing content generators."""
