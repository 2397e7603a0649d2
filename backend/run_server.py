"""
Run the SwingLevels backend server.
"""
import os

# Load environment
from dotenv import load_dotenv
backend_dir = os.path.dirname(os.path.abspath(__file__))
load_dotenv(os.path.join(backend_dir, ".env"))

import uvicorn

from swinglevels.core.config import settings

if __name__ == "__main__":
    print("Starting SwingLevels Backend Server...")
    print(f"API Docs: http://localhost:{settings.port}/docs")
    print("-" * 50)

    uvicorn.run(
        "swinglevels.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
