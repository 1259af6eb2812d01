# path: src/supplierml/api/main.py
"""
FastAPI app exposing SupplierML training, classification and evaluation.

Endpoints:
- GET  /health                        -> simple health check
- GET  /api/supplier/status           -> current trainer state
- POST /api/supplier/upload-csv       -> train from an uploaded CSV file
- POST /api/supplier/load-model       -> train from a server-local CSV path
- POST /api/supplier/classify         -> predict the category of one record
- POST /api/supplier/evaluate         -> evaluate on a server-local test CSV

Run with:

    uvicorn supplierml.api.main:app
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import (
    APIRouter,
    Depends,
    FastAPI,
    File,
    HTTPException,
    Query,
    Request,
    UploadFile,
)
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict

from supplierml.data.data_loader import save_uploaded_dataset
from supplierml.data.schema import SupplierRecord
from supplierml.exceptions import (
    DataLoadError,
    InvalidMatrixError,
    ModelNotTrainedError,
)
from supplierml.models.metrics import per_class_metrics
from supplierml.models.trainer import ModelTrainer
from supplierml.utils.logging_utils import get_logger

logger = get_logger(__name__)


class SupplierRecordRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    delivery_time: float
    quality: float
    cost: float
    category: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class PredictionResponse(BaseModel):
    predicted_category: str


router = APIRouter(prefix="/api/supplier", tags=["supplier"])


def get_trainer(request: Request) -> ModelTrainer:
    """Return the trainer owned by the running application."""
    return request.app.state.trainer


@router.get("/status")
def status(trainer: ModelTrainer = Depends(get_trainer)) -> Dict[str, str]:
    return {"state": trainer.state.value}


@router.post("/upload-csv", response_model=MessageResponse)
def upload_csv(
    file: Optional[UploadFile] = File(default=None),
    trainer: ModelTrainer = Depends(get_trainer),
) -> MessageResponse:
    """
    Train the model from an uploaded CSV file (multipart field "file").

    An empty or missing upload is rejected before the trainer is touched.
    """
    if file is None:
        raise HTTPException(status_code=400, detail="CSV file was not sent.")

    try:
        content = file.file.read()
    finally:
        file.file.close()

    if not content:
        logger.warning("Rejected empty upload %r", file.filename)
        raise HTTPException(status_code=400, detail="CSV file was not sent.")

    path = save_uploaded_dataset(content, file.filename)
    try:
        trainer.train(path)
    finally:
        path.unlink(missing_ok=True)
    return MessageResponse(
        message="Model trained successfully from the uploaded file."
    )


@router.post("/load-model", response_model=MessageResponse)
def load_model(
    csv_path: str = Query(..., description="Server-local path of the training CSV"),
    trainer: ModelTrainer = Depends(get_trainer),
) -> MessageResponse:
    """Train the model from a CSV file already present on the server."""
    trainer.train(csv_path)
    return MessageResponse(message="Model trained successfully.")


@router.post("/classify", response_model=PredictionResponse)
def classify(
    payload: SupplierRecordRequest,
    trainer: ModelTrainer = Depends(get_trainer),
) -> PredictionResponse:
    record = SupplierRecord(
        delivery_time=payload.delivery_time,
        quality=payload.quality,
        cost=payload.cost,
        category=payload.category,
    )
    prediction = trainer.classify(record)
    return PredictionResponse(predicted_category=prediction.predicted_category)


@router.post("/evaluate")
def evaluate(
    test_csv_path: str = Query(..., description="Server-local path of the test CSV"),
    trainer: ModelTrainer = Depends(get_trainer),
) -> Dict[str, Any]:
    """
    Evaluate the current model on a labelled test CSV.

    Response:
        {
          "macro_accuracy": ...,
          "micro_accuracy": ...,
          "log_loss": ...,
          "log_loss_reduction": ...,
          "confusion_matrix": [[...], ...],
          "per_class_metrics": [
              {"class_label": "Class 0", "precision": ..., "recall": ..., "f1": ...},
              ...
          ]
        }
    """
    result = trainer.evaluate(test_csv_path)
    class_metrics = per_class_metrics(result.confusion_matrix)

    response = result.to_dict()
    response["per_class_metrics"] = [m.to_dict() for m in class_metrics]
    return response


def _error_handler(status_code: int):
    def handler(request: Request, exc: Exception) -> JSONResponse:
        logger.warning(
            "%s %s failed with %s: %s",
            request.method,
            request.url.path,
            type(exc).__name__,
            exc,
        )
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return handler


def create_app(trainer: Optional[ModelTrainer] = None) -> FastAPI:
    """Build the FastAPI application around a single ModelTrainer."""
    application = FastAPI(
        title="SupplierML API",
        version="0.1.0",
        description="Supplier category classifier",
    )
    application.state.trainer = trainer if trainer is not None else ModelTrainer()

    application.add_exception_handler(ModelNotTrainedError, _error_handler(400))
    application.add_exception_handler(DataLoadError, _error_handler(500))
    application.add_exception_handler(InvalidMatrixError, _error_handler(500))

    @application.get("/health")
    def health() -> Dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok"}

    application.include_router(router)
    return application


app = create_app()
