#!/usr/bin/env python3
"""
Environment setup for Planner API.
Writes a .env file with a fresh signing key and the scheduling defaults.
"""

import secrets
import string
import os

def generate_secret_key(length=64):
    """Generate a random secret key."""
    alphabet = string.ascii_letters + string.digits + "!@#$%^&*"
    return ''.join(secrets.choice(alphabet) for _ in range(length))

def main():
    print("🚀 Setting up Planner API...\n")

    if os.path.exists('.env'):
        print("⚠️  .env file already exists. Do you want to overwrite it? (y/n): ", end="")
        response = input().lower().strip()
        if response != 'y':
            print("❌ Setup cancelled.")
            return

    secret_key = generate_secret_key(64)

    env_content = f"""# Planner API Environment Variables
DATABASE_URL=sqlite:///./planner.db
SECRET_KEY={secret_key}
ALGORITHM=HS256
ACCESS_TOKEN_EXPIRE_MINUTES=30
REFRESH_TOKEN_EXPIRE_DAYS=7

# Scheduling
WORKDAY_START_HOUR=9
WORKDAY_END_HOUR=18
MIN_SLOT_MINUTES=30
DEFAULT_TASK_MINUTES=60
FOCUS_BLOCK_MINUTES=120
SCHEDULING_HORIZON_DAYS=7
DEFAULT_TIMEZONE=UTC
"""

    with open('.env', 'w') as f:
        f.write(env_content)

    print("✅ Environment setup completed!")
    print(f"🔑 Secret key generated: {secret_key[:20]}...")

    print("\n📋 Next steps:")
    print("1. Install: pip install -e .")
    print("2. Run the application: python run.py")
    print("3. Open http://localhost:8000/docs in your browser")

    print("\n🎯 Scheduling Endpoints:")
    print("   • Auto-schedule tasks: POST /tasks/auto-schedule")
    print("   • Focus suggestions: GET /focus/suggestions")
    print("   • Protect focus time: POST /focus/protect")

if __name__ == "__main__":
    main()
