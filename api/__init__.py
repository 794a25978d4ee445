"""
api/__init__.py
────────────────
Capa HTTP (FastAPI). La aplicación se construye en api.app.create_app().
"""
