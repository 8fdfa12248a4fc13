"""Entry point for python -m py_image_compactor.

默认运行命令行接口。
"""

from .cli import main


if __name__ == "__main__":
    main()
