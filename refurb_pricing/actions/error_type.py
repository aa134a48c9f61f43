from enum import Enum

class ErrorType(str, Enum):
    '''
    操作失败原因的结构化分类

    INPUT_ERROR: 输入不满足要求（缺列、校验失败、没有可导入的行）。调用方修正输入后重试。
    NOT_FOUND: 指定 id / 名称的记录不存在。
    BUSINESS_RULE_ERROR: 违反业务约束，例如重复数据冲突。
    DATABASE_ERROR: 数据库操作失败（连接、事务、约束以外的写入失败），整批回滚。
    SYSTEM_ERROR: 未分类异常。
    '''
    # 输入问题
    INPUT_ERROR = "INPUT_ERROR"
    NOT_FOUND = "NOT_FOUND"

    # 业务规则问题
    BUSINESS_RULE_ERROR = "BUSINESS_RULE_ERROR"

    # 系统问题
    DATABASE_ERROR = "DATABASE_ERROR"
    SYSTEM_ERROR = "SYSTEM_ERROR"
