"""Start the API locally: ``python run.py``."""
import uvicorn

if __name__ == "__main__":
    uvicorn.run("relocation.app:app", host="0.0.0.0", port=8000, reload=True)
