"""压缩结果模型。

定义单个输入源与整批处理的结果数据结构。
"""

from pathlib import Path
from typing import Any

from humanize import naturalsize
from pydantic import BaseModel, Field


class BaseResult(BaseModel):
    """结果基类，包含通用字段和方法"""

    success: bool = Field(description="是否成功")
    error: str | None = Field(None, description="错误信息")

    @staticmethod
    def format_size(size_bytes: int) -> str:
        """格式化文件大小为人类可读格式"""
        return naturalsize(size_bytes, binary=True)


class ResultCollection(BaseResult):
    """结果集合基类，提供通用的统计方法"""

    results: list[Any] = Field(description="结果列表")

    def get_successful_items(self) -> list[Any]:
        """获取成功的结果项"""
        return [r for r in self.results if getattr(r, "success", False)]

    def get_failed_items(self) -> list[Any]:
        """获取失败的结果项"""
        return [r for r in self.results if not getattr(r, "success", False)]

    def get_total_count(self) -> int:
        """获取总数量"""
        return len(self.results)

    def get_success_count(self) -> int:
        """获取成功数量"""
        return len(self.get_successful_items())

    def get_failure_count(self) -> int:
        """获取失败数量"""
        return len(self.get_failed_items())

    def get_success_rate(self) -> float:
        """获取成功率（百分比）"""
        total = self.get_total_count()
        if total == 0:
            return 0.0
        return (self.get_success_count() / total) * 100


class ItemResult(BaseResult):
    """单个输入源的处理结果"""

    source: str = Field(description="原始输入字符串")
    output_path: Path | None = Field(None, description="输出文件路径")
    error_type: str | None = Field(None, description="错误类型名称")

    original_size: int = Field(0, description="输入文件大小（字节）")
    compressed_size: int = Field(0, description="输出文件大小（字节）")
    dimensions: tuple[int, int] | None = Field(None, description="图像尺寸")

    def get_size_saved(self) -> int:
        """节省的字节数"""
        return max(0, self.original_size - self.compressed_size)

    def get_compression_ratio(self) -> float:
        """压缩比例（百分比）"""
        if self.original_size == 0:
            return 0.0
        return (self.get_size_saved() / self.original_size) * 100

    def get_original_size_human(self) -> str:
        """人类可读的原始文件大小"""
        return self.format_size(self.original_size)

    def get_compressed_size_human(self) -> str:
        """人类可读的压缩后文件大小"""
        return self.format_size(self.compressed_size)

    def get_summary(self) -> str:
        """处理结果摘要"""
        if not self.success:
            return f"失败: {self.error}"

        return (
            f"{self.get_original_size_human()} → {self.get_compressed_size_human()} "
            f"({self.get_compression_ratio():.1f}% 压缩)"
        )


class BatchResult(ResultCollection):
    """批量处理结果

    各项结果按完成顺序排列，不保证与输入顺序一致。
    """

    output_dir: Path = Field(description="输出目录")
    quality: int = Field(description="使用的质量值")
    results: list[ItemResult] = Field(description="所有输入源的处理结果")

    def get_result(self, source: str) -> ItemResult | None:
        """按输入源查找结果（同一输入源出现多次时返回第一个）"""
        return next((r for r in self.results if r.source == source), None)

    def failed_sources(self) -> list[str]:
        """处理失败的输入源"""
        return [r.source for r in self.get_failed_items()]

    def get_total_original_size(self) -> int:
        """总原始大小"""
        return sum(r.original_size for r in self.results if r.success)

    def get_total_compressed_size(self) -> int:
        """总压缩后大小"""
        return sum(r.compressed_size for r in self.results if r.success)

    def get_total_size_saved(self) -> int:
        """总节省大小"""
        return sum(r.get_size_saved() for r in self.results if r.success)

    def get_summary(self) -> str:
        """批量处理摘要"""
        total = self.get_total_count()
        successful = self.get_success_count()
        success_rate = self.get_success_rate()
        size_saved = self.format_size(self.get_total_size_saved())

        return (
            f"处理 {successful}/{total} 个文件 "
            f"(成功率 {success_rate:.1f}%), "
            f"总节省 {size_saved}"
        )
