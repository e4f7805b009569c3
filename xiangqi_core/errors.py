"""
错误类型定义
"""


class FormatError(ValueError):
    """文本格式错误

    仅由文本解析抛出（局面 FEN、走子方字段、ICCS 走法），
    调用方应直接拒绝该输入，而不是尝试部分恢复。
    """
