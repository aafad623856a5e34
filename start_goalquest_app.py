from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from goalquest_app import create_app  # noqa: E402

app = create_app()

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=5000, debug=True)
