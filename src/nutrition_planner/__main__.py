"""Run with: python -m nutrition_planner"""

import uvicorn

from nutrition_planner.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "nutrition_planner.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
