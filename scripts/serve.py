"""Serve the API with uvicorn (HTTPS when key.pem / cert.pem are present).

Usage:
    python scripts/serve.py
"""
import os
import uvicorn
from dotenv import load_dotenv

# .env must be loaded before Settings reads the environment
load_dotenv()

from sentiment.config import Settings

if __name__ == '__main__':
    s = Settings()
    ssl = {}
    if os.path.exists("key.pem") and os.path.exists("cert.pem"):
        ssl = {"ssl_keyfile": "key.pem", "ssl_certfile": "cert.pem"}
    uvicorn.run("api.main:app", host="0.0.0.0", port=s.PORT, **ssl)
