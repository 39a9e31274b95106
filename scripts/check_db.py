"""Quick check of database state."""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from dotenv import load_dotenv
load_dotenv()

from todo_service.config import get_settings
from todo_service.db import Database, TodoRepository, schema_version

db = Database.from_settings(get_settings())
db.init()

print(f"=== Schema v{schema_version(db)} ({db.dialect}) ===")

print("\n=== Todos ===")
todos = TodoRepository(db).list_all()
print(f"Total: {len(todos)}")
for t in todos:
    print(f"  {t.id} | {t.content[:60]}")

db.close()
