"""消息格式化工具模块。

提供统一的错误消息、成功消息格式化功能。
"""

from pathlib import Path


class MessageFormatter:
    """统一的消息格式化器"""

    @staticmethod
    def operation_failed(
        operation: str, target: str | Path, error: Exception | None = None
    ) -> str:
        """操作失败消息"""
        msg = f"{operation}失败: {target}"
        if error:
            msg += f" - {error}"
        return msg

    @staticmethod
    def format_error(operation: str, source: str | Path, error: Exception) -> str:
        """格式化通用错误消息"""
        return f"{operation}失败 [{source}]: {error}"

    @staticmethod
    def item_saved(source: str, output_path: str | Path, summary: str) -> str:
        """单项处理成功消息"""
        return f"图像已处理并保存: {source} -> {output_path} ({summary})"

    @staticmethod
    def temp_file_created(temp_path: str | Path, source: str) -> str:
        """临时文件创建消息"""
        return f"临时文件已创建: {temp_path} (来源: {source})"

