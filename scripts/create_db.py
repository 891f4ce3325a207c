"""
创建配置库表并写入演示数据

Usage:
  DATABASE_URL=sqlite:///./data/kotonoha.db PYTHONPATH=src python scripts/create_db.py [--seed]
"""
import argparse

from kotonoha.core import get_settings, setup_logging
from kotonoha.core.database import build_engine, create_tables
from kotonoha.seed import seed_demo_data

settings = get_settings()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create config store tables.")
    parser.add_argument("--seed", action="store_true", help="Insert demo styles/examples/tips.")
    args = parser.parse_args()

    setup_logging(settings.log_level)
    engine = build_engine(settings.database_url)

    # 创建所有表
    create_tables(engine)
    print("✅ 数据库表创建完成")

    if args.seed:
        inserted = seed_demo_data(engine)
        print(f"✅ 演示数据写入 {inserted} 条")
