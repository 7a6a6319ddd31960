from pathlib import Path

# Package root, where the optional .env file is looked up
BASE_PATH = Path(__file__).resolve().parent.parent

# Default directory for uploaded media, relative to the working directory
UPLOAD_DIR = Path('uploads')
