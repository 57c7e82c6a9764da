"""
FastAPI server for the wheel-soil contact engine.

Provides REST API endpoints and a simple HTML UI.
"""

from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from terramech import __version__
from terramech.analysis.analyzer import ContactAnalyzer
from terramech.models.inputs import WheelSoilInputs, example_inputs
from terramech.models.outputs import (
    ContactAnalysisResult,
    LineSearchReport,
    SlipSweepResult,
    StressProfileResult,
)
from terramech.models.soil import SoilParameterSet, UnknownPresetError, list_presets

# Create FastAPI app
app = FastAPI(
    title="Terramech Contact API",
    description="""
    Wheel-soil contact patch engine.

    Integrates Reece pressure-sinkage and Janosi-Hanamoto shear stress over
    the contact arc of a rigid wheel into vertical load, motion resistance,
    thrust and driving torque.
    """,
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


HTML_UI = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Terramech Contact Engine</title>
    <style>
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            max-width: 1200px;
            margin: 0 auto;
            padding: 20px;
            background: #f5f5f5;
            color: #333;
        }
        h1 { color: #2c3e50; border-bottom: 3px solid #8e6e3d; padding-bottom: 10px; }
        .container { display: flex; gap: 20px; flex-wrap: wrap; }
        .panel {
            flex: 1;
            min-width: 400px;
            background: white;
            padding: 20px;
            border-radius: 8px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }
        textarea {
            width: 100%;
            height: 360px;
            font-family: 'Monaco', 'Menlo', monospace;
            font-size: 12px;
        }
        button {
            padding: 10px 20px;
            cursor: pointer;
            border: none;
            border-radius: 4px;
            margin: 10px 10px 0 0;
            background: #8e6e3d;
            color: white;
        }
        pre { white-space: pre-wrap; font-size: 11px; }
    </style>
</head>
<body>
    <h1>Terramech Contact Engine</h1>
    <div class="container">
        <div class="panel">
            <h3>Wheel / Soil Inputs (JSON)</h3>
            <textarea id="inputJson">{
  "soil": "sandy",
  "tire_width_m": 0.2,
  "tire_radius_m": 0.3,
  "contact_length_m": 0.1,
  "slip_ratio": 0.2
}</textarea>
            <div>
                <button onclick="run('/analyze')">Analyze</button>
                <button onclick="run('/sweep')">Slip Sweep</button>
                <button onclick="run('/profile')">Stress Profile</button>
                <button onclick="run('/solve')">Solve Entry Angle</button>
            </div>
        </div>
        <div class="panel">
            <h3>Result</h3>
            <pre id="results">Enter wheel and soil parameters and pick an analysis.</pre>
        </div>
    </div>
    <script>
        async function run(path) {
            const out = document.getElementById('results');
            out.textContent = 'Running...';
            try {
                const input = JSON.parse(document.getElementById('inputJson').value);
                const response = await fetch(path, {
                    method: 'POST',
                    headers: { 'Content-Type': 'application/json' },
                    body: JSON.stringify(input)
                });
                const data = await response.json();
                if (!response.ok) throw new Error(data.detail || 'Request failed');
                out.textContent = JSON.stringify(data, null, 2);
            } catch (e) {
                out.textContent = 'Error: ' + e.message;
            }
        }
    </script>
</body>
</html>
"""


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


class PresetSummary(BaseModel):
    """One soil preset, in input-document units."""
    key: str
    name: str
    k1: float
    k2: float
    n: float
    cohesion_Pa: float
    friction_angle_deg: float
    shear_modulus_m: float
    density_kg_m3: float


def _analyzer(inputs: WheelSoilInputs) -> ContactAnalyzer:
    try:
        return ContactAnalyzer(inputs)
    except UnknownPresetError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/", response_class=HTMLResponse)
async def root():
    """Serve the HTML UI."""
    return HTML_UI


@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check if the API is running."""
    return HealthResponse(status="healthy", version=__version__)


@app.get("/presets", response_model=list[PresetSummary], tags=["Reference"])
async def get_presets():
    """List the built-in soil presets."""
    summaries = []
    for key in list_presets():
        soil = SoilParameterSet.from_preset(key)
        summaries.append(
            PresetSummary(
                key=key,
                name=soil.name,
                k1=soil.k1,
                k2=soil.k2,
                n=soil.n,
                cohesion_Pa=soil.cohesion,
                friction_angle_deg=soil.friction_angle_deg,
                shear_modulus_m=soil.shear_modulus_x,
                density_kg_m3=soil.density,
            )
        )
    return summaries


@app.get("/example", response_model=WheelSoilInputs, tags=["Reference"])
async def get_example():
    """Get an example input configuration."""
    return example_inputs()


@app.post("/analyze", response_model=ContactAnalysisResult, tags=["Analysis"])
def analyze(inputs: WheelSoilInputs):
    """
    Integrate the contact reactions of one wheel.

    Returns vertical load, motion resistance, thrust, drawbar pull and torque,
    plus any numeric degeneracies met on the way.
    """
    return _analyzer(inputs).analyze()


@app.post("/sweep", response_model=SlipSweepResult, tags=["Analysis"])
def sweep(
    inputs: WheelSoilInputs,
    slips: Optional[list[float]] = Query(default=None, description="Slip ratios to evaluate"),
):
    """Evaluate the reactions across a range of slip ratios."""
    return _analyzer(inputs).run_sweep(slips)


@app.post("/profile", response_model=StressProfileResult, tags=["Analysis"])
def profile(
    inputs: WheelSoilInputs,
    samples: int = Query(default=51, ge=2, le=2001, description="Number of angles sampled"),
):
    """Sample radial and shear stress over the contact arc."""
    return _analyzer(inputs).stress_profile(samples)


@app.post("/solve", response_model=LineSearchReport, tags=["Analysis"])
def solve(
    inputs: WheelSoilInputs,
    target_load: Optional[float] = Query(default=None, description="Vertical load to balance (N)"),
):
    """Run the equilibrium line search for the entry angle and return its trace."""
    try:
        return _analyzer(inputs).solve(target_load)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
