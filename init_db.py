#!/usr/bin/env python3
"""数据库初始化脚本"""

import sys
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from resume_optimizer.core.data_manager import DataManager
from resume_optimizer.utils.logger import app_logger
from resume_optimizer.utils.config import get_settings


def main():
    """初始化数据库"""
    try:
        print("🚀 开始初始化数据库...")

        db_path = get_settings().database.path
        print(f"📍 数据库路径: {db_path}")

        # 初始化数据管理器（会自动创建表）
        DataManager(db_path)

        print("✅ 数据库初始化完成！")
        print("\n📊 数据库表结构:")
        print("   - resumes (简历分析记录表)")

    except Exception as e:
        print(f"❌ 数据库初始化失败: {str(e)}")
        app_logger.error(f"数据库初始化失败: {str(e)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
