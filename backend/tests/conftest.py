import os
import tempfile

# must be set before storefront.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CHECKOUT_DELAY_MS"] = "0"
os.environ["SEED_DEMO_DATA"] = "true"
os.environ["LOCK_DIR"] = tempfile.mkdtemp(prefix="storefront-locks-")
os.environ.pop("GEMINI_API_KEY", None)
