"""Provides application for development purposes."""
from accounts.factory import create_web_app
from accounts.services import users

app = create_web_app()
app.config['DEBUG'] = True
with app.app_context():
    users.create_all()

if __name__ == "__main__":
    app.run(debug=True)
