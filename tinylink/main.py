from tinylink.app_factory import create_app

# uvicorn tinylink.main:app
app = create_app()
