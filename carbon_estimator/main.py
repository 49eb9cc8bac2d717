from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes.analyze_footprint import router as analyze_footprint_router

app = FastAPI(
    title="AI Carbon Footprint Estimator",
    version="0.3.0",
    description="Estimates daily CO₂ from free-text activities with Gemini and an offline keyword fallback.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Footprint-Source"],
)


@app.get("/health")
async def health():
    return {"status": "ok", "service": "carbon-estimator"}


app.include_router(analyze_footprint_router)
