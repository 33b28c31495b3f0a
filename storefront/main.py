# storefront/main.py
import uvicorn

from storefront.api import create_app
from storefront.utils.settings import Settings

settings = Settings.from_env()
app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
