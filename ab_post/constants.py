"""
POST 请求工具常量模块

集中定义内容类型、超时哨兵值、连接池与日志等默认配置
"""

# ========== 内容类型 ==========
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"

# ========== 超时配置 ==========
# 共享客户端的默认超时时间（秒），同时作用于连接和读写阶段
DEFAULT_TIMEOUT = 10

# 单次调用的超时参数以毫秒为单位：-1 表示沿用共享客户端默认值，0 表示不限制
USE_DEFAULT_TIMEOUT = -1
NO_TIMEOUT = 0

# ========== 连接池配置 ==========
DEFAULT_POOL_CONFIG = {
    "pool_connections": 10,
    "pool_maxsize": 20,
}

# ========== 流式读取 ==========
STREAM_CHUNK_SIZE = 8192

# ========== 代理认证 ==========
PROXY_AUTH_REQUIRED = 407
PROXY_AUTHORIZATION_HEADER = "Proxy-Authorization"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
