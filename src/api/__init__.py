"""FastAPI routes and endpoints.

Endpoints:
- GET /health, GET /ready: liveness and readiness
- GET /v1/search, GET /v1/search/{slug}: merged Quran + Hadith search
- GET /v1/quran/...: translations, surahs, verses
- GET /v1/hadith/...: collections, single hadiths
"""
