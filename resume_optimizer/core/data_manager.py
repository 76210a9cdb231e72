"""数据管理器核心模块"""

import sqlite3
import json
from typing import List, Optional
from datetime import datetime
from pathlib import Path
from contextlib import asynccontextmanager

from ..exceptions import PersistenceError
from ..models.analysis import AnalysisRecord, AnalysisRecordCreate
from ..utils.logger import db_logger


class DataManager:
    """数据管理器"""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._init_database()

    def _init_database(self):
        """初始化数据库"""
        try:
            # 确保数据库目录存在
            db_dir = Path(self.db_path).parent
            db_dir.mkdir(parents=True, exist_ok=True)

            with sqlite3.connect(self.db_path) as conn:
                self._create_tables(conn)
                db_logger.info(f"数据库初始化完成: {self.db_path}")
        except Exception as e:
            db_logger.error(f"数据库初始化失败: {str(e)}")
            raise

    def _create_tables(self, conn: sqlite3.Connection):
        """创建数据表"""
        # 分析记录表
        conn.execute("""
            CREATE TABLE IF NOT EXISTS resumes (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                original_filename TEXT NOT NULL,
                job_description TEXT NOT NULL,
                parsed_content TEXT NOT NULL,
                ats_score INTEGER NOT NULL,
                match_summary TEXT,
                recommendations TEXT,  -- JSON array
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        conn.execute("CREATE INDEX IF NOT EXISTS idx_resumes_created_at ON resumes(created_at)")

        conn.commit()

    @asynccontextmanager
    async def get_connection(self):
        """获取数据库连接"""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path)
            conn.row_factory = sqlite3.Row
            yield conn
        except Exception:
            if conn:
                conn.rollback()
            raise
        finally:
            if conn:
                conn.close()

    # ==================== 分析记录 ====================

    async def create_resume(self, record_data: AnalysisRecordCreate) -> AnalysisRecord:
        """保存分析记录"""
        try:
            async with self.get_connection() as conn:
                cursor = conn.execute("""
                    INSERT INTO resumes (
                        original_filename, job_description, parsed_content,
                        ats_score, match_summary, recommendations
                    ) VALUES (?, ?, ?, ?, ?, ?)
                """, (
                    record_data.original_filename,
                    record_data.job_description,
                    record_data.parsed_content,
                    record_data.ats_score,
                    record_data.match_summary,
                    json.dumps(record_data.recommendations, ensure_ascii=False)
                ))

                record_id = cursor.lastrowid
                conn.commit()

                row = conn.execute("SELECT * FROM resumes WHERE id = ?", (record_id,)).fetchone()
                record = self._row_to_record(row)
                db_logger.info(f"保存分析记录成功: {record.original_filename} (ID: {record_id})")

                return record
        except sqlite3.Error as e:
            db_logger.error(f"保存分析记录失败: {str(e)}")
            raise PersistenceError(f"Could not save analysis record: {str(e)}") from e

    async def get_resume_by_id(self, record_id: int) -> Optional[AnalysisRecord]:
        """根据ID获取分析记录"""
        async with self.get_connection() as conn:
            cursor = conn.execute(
                "SELECT * FROM resumes WHERE id = ?", (record_id,)
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_record(row)
            return None

    async def list_resumes(self, limit: int = 20) -> List[AnalysisRecord]:
        """获取最近的分析记录"""
        async with self.get_connection() as conn:
            cursor = conn.execute(
                "SELECT * FROM resumes ORDER BY created_at DESC, id DESC LIMIT ?", (limit,)
            )
            return [self._row_to_record(row) for row in cursor.fetchall()]

    async def count_resumes(self) -> int:
        """分析记录总数"""
        async with self.get_connection() as conn:
            cursor = conn.execute("SELECT COUNT(*) FROM resumes")
            return cursor.fetchone()[0]

    # ==================== 数据转换方法 ====================

    def _row_to_record(self, row: sqlite3.Row) -> AnalysisRecord:
        """将数据库行转换为AnalysisRecord对象"""
        return AnalysisRecord(
            id=row["id"],
            original_filename=row["original_filename"],
            job_description=row["job_description"],
            parsed_content=row["parsed_content"],
            ats_score=row["ats_score"],
            match_summary=row["match_summary"],
            recommendations=json.loads(row["recommendations"]) if row["recommendations"] else [],
            created_at=datetime.fromisoformat(row["created_at"])
        )
