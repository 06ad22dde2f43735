import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'desamedia-dev')

    # State portal (currentUser, searchTerm, dst.) disimpan di cookie Flask terpisah,
    # karena cookie "session" dipakai untuk session cookie Firebase.
    SESSION_COOKIE_NAME = "desamedia_state"
    FIREBASE_SESSION_COOKIE = "session"
    FIREBASE_SESSION_DAYS = 5

    # Cookie secure hanya TRUE di HTTPS production
    SESSION_COOKIE_SECURE = os.environ.get("SESSION_COOKIE_SECURE", "0") == "1"

    # Matikan (0) untuk development/test tanpa service account
    FIREBASE_ENABLED = os.environ.get("FIREBASE_ENABLED", "1") == "1"

    # Firebase Admin SDK (download dari Firebase Console -> Service accounts)
    FIREBASE_SERVICE_ACCOUNT = os.environ.get("FIREBASE_SERVICE_ACCOUNT", "serviceAccountKey.json")
    FIREBASE_WEB_API_KEY = os.environ.get("FIREBASE_WEB_API_KEY")
    FIREBASE_STORAGE_BUCKET = os.environ.get("FIREBASE_STORAGE_BUCKET")

    # Login pakai username, email dibentuk jadi <username>@desamedia.id
    AUTH_EMAIL_DOMAIN = os.environ.get("AUTH_EMAIL_DOMAIN", "desamedia.id")

    # 'firestore' untuk production, 'memory' untuk development tanpa Firebase
    CONTENT_STORE = os.environ.get("CONTENT_STORE", "firestore")

    # Konfigurasi Upload: 'firebase' (Cloud Storage) atau 'local' (folder static)
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "firebase")
    BASE_DIR = os.path.abspath(os.path.dirname(__file__))
    UPLOAD_FOLDER = os.path.join(BASE_DIR, 'desamedia/static/uploads')
    MAX_IMAGE_SIZE = 2 * 1024 * 1024  # Batas gambar artikel 2MB
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024

    # Listing publik di-refresh tiap 30 detik
    REFRESH_INTERVAL = int(os.environ.get("REFRESH_INTERVAL", "30"))
    LISTING_LIMIT = 50

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
