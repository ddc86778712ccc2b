# utils/exceptions.py
from typing import Any, Optional
from werkzeug.exceptions import HTTPException


class BizError(HTTPException):
    """业务异常：由蓝图/应用级 errorhandler 统一转换为 {"message": ...}"""

    code: int  # HTTP 状态码
    message: str  # 业务提示
    data: Optional[Any]  # 附加数据

    def __init__(self, message: str = "Bad Request", code: int = 400, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(description=message)

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.data is not None:
            body["data"] = self.data
        return body
