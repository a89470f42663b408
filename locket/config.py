# locket.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

PUBLIC_DIR = BASE_DIR / "public"
TEMPLATES_DIR = BASE_DIR / "templates"

"""
Configuration centrale de Locket Photo Print.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose les chemins utiles (PUBLIC_DIR, TEMPLATES_DIR)
- Normalise et expose les secrets/URLs (PayPal, Supabase), sécurité cookies, CORS/hosts
- Les consommateurs lisent `config.X` à l'appel (et non à l'import) pour rester patchables en tests
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _flag(name: str, default: str = "false") -> bool:
    return _clean_env(os.getenv(name, default)).lower() in ("1", "true", "yes")

# PayPal: identifiants serveur (jamais exposés au client) et mode sandbox/live
PAYPAL_CLIENT_ID = _clean_env(os.getenv("PAYPAL_CLIENT_ID") or "")
PAYPAL_SECRET = _clean_env(os.getenv("PAYPAL_SECRET") or "")
PAYPAL_MODE = _clean_env(os.getenv("PAYPAL_MODE") or "sandbox").lower()

PAYPAL_LIVE_URL = "https://api-m.paypal.com"
PAYPAL_SANDBOX_URL = "https://api-m.sandbox.paypal.com"

def paypal_base_url(mode: str | None = None) -> str:
    """URL de l'API PayPal: live si mode == 'live', sandbox sinon."""
    return PAYPAL_LIVE_URL if (mode if mode is not None else PAYPAL_MODE) == "live" else PAYPAL_SANDBOX_URL

# Devise unique (pas de sélection côté client)
PAYPAL_CURRENCY = "USD"
# Cache de jetons d'accès: désactivé par défaut (un jeton neuf par commande)
PAYPAL_TOKEN_CACHE = _flag("PAYPAL_TOKEN_CACHE")

# Supabase (fournisseur d'identité)
SUPABASE_URL = _clean_env(os.getenv("SUPABASE_URL") or "")
SUPABASE_ANON = _clean_env(os.getenv("SUPABASE_ANON_KEY") or os.getenv("SUPABASE_KEY") or "")

if SUPABASE_URL and not SUPABASE_URL.startswith("http"):
    SUPABASE_URL = "https://" + SUPABASE_URL
if SUPABASE_URL.endswith("/"):
    SUPABASE_URL = SUPABASE_URL.rstrip("/")

# Cookies
COOKIE_SECURE = _flag("COOKIE_SECURE")

# CORS (dev)
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]

# Routes de navigation utilisées par l'en-tête
LANDING_PATH = "/"
LOGIN_PATH = "/login"
SIGNUP_PATH = "/signup"
PROFILE_PATH = "/profile"

SIGNUP_REDIRECT_URL = os.getenv("SIGNUP_REDIRECT_URL", "http://localhost:8000/login")

BASE_URL = _clean_env(os.getenv("BASE_URL") or "http://localhost:8000")
