from typing import Any, Dict, Optional
from pydantic import BaseModel
from refurb_pricing.actions.error_type import ErrorType

class ActionResult(BaseModel):
    '''
    一次操作的结构化结果

    参数	说明
    ok: bool - 操作是否完成
    error_type: Optional[ErrorType] - 失败原因分类
    error_message: Optional[str] - 面向用户的简短说明，不包含堆栈
    data: Optional[Any] - 成功时的结构化数据
    side_effect: bool - 是否修改了持久化数据
    '''
    ok: bool

    error_type: Optional[ErrorType] = None
    error_message: Optional[str] = None

    data: Optional[Any] = None

    side_effect: bool = False

    @classmethod
    def success(cls, data: Any = None, *, side_effect: bool = False) -> "ActionResult":
        return cls(ok=True, data=data, side_effect=side_effect)

    @classmethod
    def failure(cls, error_type: ErrorType, message: str) -> "ActionResult":
        return cls(ok=False, error_type=error_type, error_message=message)

    def to_response(self) -> Dict[str, Any]:
        '''JSON body for the HTTP layer'''
        if self.ok:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error_message, "error_type": self.error_type.value}
