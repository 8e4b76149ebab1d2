"""
Verify the development environment: Python, .env settings, PostgreSQL and pgvector.

    python verify_setup.py
"""
from verifier.main import main

if __name__ == "__main__":
    main()
