from app.innovex import create_app

app = create_app()
