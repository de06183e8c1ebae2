"""
데이터베이스 연결 설정
SQLAlchemy Session을 사용한 동기 연결 (PostgreSQL 기본, 로컬/테스트는 SQLite)
Lazy initialization으로 환경 변수가 없을 때도 앱이 시작될 수 있도록 함
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from app.core.config import settings
from typing import Iterator, Optional
import logging

logger = logging.getLogger(__name__)

# 전역 변수 (lazy initialization)
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None

# Base 클래스 (모든 모델의 부모 클래스)
Base = declarative_base()


def _enable_sqlite_immediate_transactions(engine: Engine) -> None:
    """
    pysqlite 드라이버의 트랜잭션 처리를 SQLAlchemy가 직접 관리하도록 변경
    - SAVEPOINT(begin_nested)가 정상 동작하도록 드라이버 자동 BEGIN 비활성화
    - BEGIN IMMEDIATE로 쓰기 트랜잭션을 직렬화 (동시 쓰기 시 데드락 대신 대기)
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """URL 종류에 맞는 옵션으로 엔진 생성"""
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": 30},
        )
        _enable_sqlite_immediate_transactions(engine)
        return engine

    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,  # 연결 상태 확인
        pool_size=5,
        max_overflow=10,
    )


def get_engine() -> Engine:
    """
    데이터베이스 엔진을 lazy하게 생성
    처음 호출될 때만 엔진을 생성하여 환경 변수 오류를 지연시킴
    """
    global _engine
    if _engine is None:
        try:
            _engine = create_db_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
        except ValueError as e:
            raise RuntimeError(
                f"Failed to initialize database: {str(e)}\n"
                "This error occurs when database environment variables are not configured."
            ) from e
    return _engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


def get_session_local() -> sessionmaker:
    """세션 팩토리를 lazy하게 생성"""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = create_session_factory(get_engine())
    return _SessionLocal


def get_db() -> Iterator[Session]:
    """
    데이터베이스 세션 의존성
    FastAPI Depends에서 사용
    """
    SessionLocal = get_session_local()
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def check_connection() -> bool:
    """
    데이터베이스 연결 테스트
    """
    try:
        engine = get_engine()
        with engine.connect():
            logger.info("Database connection successful")
            return True
    except Exception as e:
        logger.error(f"Failed to connect to database: {e}")
        return False
