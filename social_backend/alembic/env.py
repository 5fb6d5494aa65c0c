import os
import sys
from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import engine_from_config, pool

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
SETTINGS_ENV = os.path.join(PROJECT_ROOT, 'social_backend', 'config', 'settings.env')

# alembic CLI는 프로젝트 루트 밖에서도 실행될 수 있음
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# 마이그레이션 시에는 셸에 남은 값보다 settings.env 값을 우선
load_dotenv(SETTINGS_ENV, override=True)

from social_backend.core.database import Base, DB_SYNC_URL, import_models  # noqa: E402

config = context.config
if config.config_file_name:
    fileConfig(config.config_file_name)

# 앱과 같은 설정에서 만든 동기 드라이버 URL 사용
config.set_main_option('sqlalchemy.url', DB_SYNC_URL.replace('%', '%%'))

import_models()
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """
    DB 연결 없이 SQL 스크립트만 출력
    """
    context.configure(
        url=DB_SYNC_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={'paramstyle': 'named'},
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    동기 엔진으로 접속해 리비전 적용
    """
    engine = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix='sqlalchemy.',
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
