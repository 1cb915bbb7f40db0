"""常用时间工具：农历换算、节假日查询、日期格式化，以及 HTTP 请求构造"""

__version__ = "1.0.0"
