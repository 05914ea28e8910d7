from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List

from gym_pricing import __version__
from gym_pricing.api.state import engine

app = FastAPI(
    title="Gym Pricing API",
    description="Membership quote calculator for plans, add-ons and groups",
    version=__version__
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CalcRequest(BaseModel):
    plan_id: str
    feature_ids: List[str] = Field(default_factory=list)
    member_count: int


class PlanResponse(BaseModel):
    id: str
    name: str
    cost: float


class FeatureResponse(BaseModel):
    id: str
    name: str
    cost: float
    is_premium: bool


@app.get("/")
async def root():
    return {"status": "online", "message": "Gym Pricing API Active"}


@app.get("/plans", response_model=List[PlanResponse])
async def list_plans():
    return [
        PlanResponse(id=p.id, name=p.name, cost=float(p.cost))
        for p in engine.list_plans()
    ]


@app.get("/features", response_model=List[FeatureResponse])
async def list_features():
    return [
        FeatureResponse(id=f.id, name=f.name, cost=float(f.cost), is_premium=f.is_premium)
        for f in engine.list_features()
    ]


@app.post("/calculate")
async def calculate_quote(req: CalcRequest):
    result = engine.calculate_total_cost(req.plan_id, req.feature_ids, req.member_count)
    if not result.ok:
        raise HTTPException(status_code=422, detail=result.to_dict()["error"])
    return result.to_dict()
