"""AI简历优化系统主应用入口"""

import asyncio
import argparse
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, File, Form, Query, UploadFile, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import ResumeOptimizerError
from .models.analysis import AnalysisRecord, AnalysisResponse
from .services.resume_service import ResumeService, get_resume_service, close_resume_service
from .utils.config import get_settings
from .utils.helpers import get_mime_type
from .utils.logger import app_logger, api_logger

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_resume_service()


# FastAPI应用实例
app = FastAPI(
    title="AI简历优化系统",
    description="上传简历与岗位描述，计算ATS关键词匹配度并生成改进建议",
    version=settings.app.version,
    lifespan=lifespan
)

# 添加CORS中间件
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 已上传文件的只读访问
Path(settings.upload.upload_dir).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.upload.upload_dir), name="uploads")


# ==================== API路由 ====================

@app.get("/")
async def root():
    """根路径"""
    return {
        "message": settings.app.name,
        "version": settings.app.version,
        "status": "running",
        "timestamp": datetime.now().isoformat()
    }


@app.get("/health")
async def health_check():
    """健康检查"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "components": {
            "database": "enabled" if settings.database.enabled else "disabled",
            "suggestion_service": "configured" if settings.openai.api_key else "missing_api_key"
        }
    }


# ==================== 简历分析API ====================

@app.post("/api/resume/analyze", response_model=AnalysisResponse)
async def analyze_resume(
    resume: Optional[UploadFile] = File(None),
    jobDescription: Optional[str] = Form(None),
    resume_service: ResumeService = Depends(get_resume_service)
):
    """分析简历与岗位描述"""
    filename = resume.filename if resume else None
    content_type = resume.content_type if resume else None
    content = await resume.read() if resume else None

    api_logger.info(f"收到分析请求: {filename} ({content_type})")

    return await resume_service.analyze_upload(filename, content_type, content, jobDescription)


@app.get("/api/resume")
async def list_resume_records(
    limit: int = Query(20, ge=1, le=100),
    resume_service: ResumeService = Depends(get_resume_service)
):
    """获取最近的分析记录"""
    resumes, total = await resume_service.list_records(limit)
    return {
        "resumes": resumes,
        "total": total,
        "limit": limit
    }


@app.get("/api/resume/{resume_id}", response_model=AnalysisRecord)
async def get_resume_record(
    resume_id: int,
    resume_service: ResumeService = Depends(get_resume_service)
):
    """获取已保存的分析记录"""
    record = await resume_service.get_record(resume_id)
    if not record:
        raise HTTPException(status_code=404, detail="Resume record not found.")
    return record


# ==================== 异常处理 ====================

@app.exception_handler(ResumeOptimizerError)
async def resume_optimizer_exception_handler(request, exc: ResumeOptimizerError):
    """业务异常处理"""
    if exc.status_code >= 500:
        api_logger.error(f"分析失败: {exc.message}")
    else:
        api_logger.warning(f"请求无效: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    """HTTP异常统一为 {error} 格式"""
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    """参数校验失败同样返回 {error} 格式"""
    errors = exc.errors()
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()))
        message = f"Invalid request parameter {location}: {errors[0].get('msg')}"
    else:
        message = "Invalid request parameters."
    api_logger.warning(f"请求参数无效: {message}")
    return JSONResponse(status_code=422, content={"error": message})


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """全局异常处理"""
    api_logger.exception(f"未处理的异常: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={"error": "Server error during analysis."}
    )


# ==================== 命令行接口 ====================

async def cli_analyze(args) -> int:
    """命令行分析单个简历文件"""
    resume_path = Path(args.resume)
    if not resume_path.is_file():
        print(f"错误: 简历文件不存在 ({resume_path})")
        return 1

    if args.job_file:
        job_description = Path(args.job_file).read_text(encoding="utf-8")
    else:
        job_description = args.job_description

    # 命令行读取的是本地文件，不再复制到上传目录
    settings.upload.save_files = False
    if args.no_save:
        settings.database.enabled = False

    resume_service = ResumeService.from_settings(settings)
    try:
        response = await resume_service.analyze_upload(
            resume_path.name,
            get_mime_type(str(resume_path)),
            resume_path.read_bytes(),
            job_description
        )
    except ResumeOptimizerError as e:
        print(f"分析失败: {e.message}")
        return 1
    finally:
        await resume_service.close()

    print(response.model_dump_json(by_alias=True, indent=2))
    return 0


def main():
    """主函数"""
    parser = argparse.ArgumentParser(description="AI简历优化系统")
    subparsers = parser.add_subparsers(dest="command", help="可用命令")

    # 启动API服务器
    server_parser = subparsers.add_parser("server", help="启动API服务器")
    server_parser.add_argument("--host", default=settings.app.host, help="服务器地址")
    server_parser.add_argument("--port", type=int, default=settings.app.port, help="服务器端口")
    server_parser.add_argument("--reload", action="store_true", help="开发模式")

    # 分析简历
    analyze_parser = subparsers.add_parser("analyze", help="分析本地简历文件")
    analyze_parser.add_argument("resume", help="简历文件路径(PDF或DOCX)")
    job_group = analyze_parser.add_mutually_exclusive_group(required=True)
    job_group.add_argument("--job-description", help="岗位描述文本")
    job_group.add_argument("--job-file", help="岗位描述文件路径")
    analyze_parser.add_argument("--no-save", action="store_true", help="不保存分析记录")

    args = parser.parse_args()

    if args.command == "server":
        import uvicorn
        app_logger.info(f"启动服务: {args.host}:{args.port}")
        uvicorn.run(
            "resume_optimizer.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload
        )
    elif args.command == "analyze":
        sys.exit(asyncio.run(cli_analyze(args)))
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
