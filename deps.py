"""Centralized imports for the entire project (app + i18n_audit)."""

# Standard library
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

# External
from dotenv import load_dotenv
from fastapi import (
    APIRouter,
    HTTPException,
)
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
