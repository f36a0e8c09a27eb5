"""
FastAPI Backend for the Statement Importer
RESTful endpoints for detecting and importing statement files.
"""

from datetime import datetime

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from ..config import config
from ..loaders.excel_loader import WorkbookLoadError
from ..loaders.source import UnsupportedSourceError
from ..logging_config import get_logger, setup_logging
from ..models import FileType
from ..pipeline import (
    NoParserAvailableError,
    detect_file_type,
    import_into_store,
    summarize_transactions
)
from ..store import TransactionStore
from ..validators.record_validator import ValidationError

setup_logging()
logger = get_logger(__name__)


def get_store(request: Request) -> TransactionStore:
    """Store owned by the running application."""
    return request.app.state.transaction_store


def create_app() -> FastAPI:
    """Build the application with its own empty transaction store."""
    app = FastAPI(
        title="Statement Importer API",
        description="Import transactions from spreadsheet and PDF statements",
        version=config.VERSION
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.transaction_store = TransactionStore()

    @app.get("/")
    async def root():
        """Root endpoint - API information"""
        return {
            "message": config.APP_NAME,
            "version": config.VERSION,
            "endpoints": {
                "POST /detect": "Detect the format of an uploaded file",
                "POST /import": "Import transactions from a spreadsheet or PDF",
                "GET /transactions": "Transactions from the latest import",
                "GET /health": "Health check"
            }
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat()
        }

    @app.post("/detect")
    async def detect(file: UploadFile = File(..., description="Spreadsheet or PDF statement")):
        """
        Detect the format of an uploaded file without extracting it.

        - **file**: File to classify by name and content type
        """
        file_type = detect_file_type(file.filename, file.content_type)
        return {
            "filename": file.filename,
            "fileType": file_type.value,
            "supported": file_type != FileType.UNKNOWN
        }

    @app.post("/import")
    async def import_file(
        file: UploadFile = File(..., description="Spreadsheet or PDF statement"),
        store: TransactionStore = Depends(get_store)
    ):
        """
        Import transactions from an uploaded file and publish them to the store.

        - **file**: .xlsx/.xlsm/.xls workbook or .pdf statement

        Returns the import result plus a short summary.
        """
        file_name = file.filename or config.DEFAULT_SOURCE_NAME
        is_valid, error = config.validate_file(file_name, file.size)
        if not is_valid:
            raise HTTPException(status_code=400, detail=error)

        try:
            result = await import_into_store(store, file)
        except NoParserAvailableError as e:
            raise HTTPException(status_code=415, detail=str(e))
        except UnsupportedSourceError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except (WorkbookLoadError, ValidationError) as e:
            raise HTTPException(status_code=422, detail=str(e))
        except Exception as e:
            logger.error(f"Error importing {file_name}: {str(e)}", exc_info=True)
            raise HTTPException(status_code=422, detail=f"Unable to import {file_name}: {str(e)}")

        if not result.transactions:
            status, message = "no_transactions", "No transactions detected"
        else:
            status, message = "success", f"Imported {len(result.transactions)} transactions"

        return {
            "status": status,
            "message": message,
            **result.to_dict(),
            "summary": summarize_transactions(result.transactions)
        }

    @app.get("/transactions")
    async def list_transactions(store: TransactionStore = Depends(get_store)):
        """Transactions from the latest successful import"""
        transactions = store.get_transactions()
        return {
            "total_transactions": len(transactions),
            "transactions": [txn.to_dict() for txn in transactions]
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
