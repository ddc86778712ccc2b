from flask import jsonify


def json_response(data=None, code=200):
    """直接返回文档本身（对象 / 列表 / null），不做外层包装"""
    resp = jsonify(data)
    resp.status_code = code
    return resp


def error_response(message="Server Error", code=500, key="message"):
    resp = jsonify({key: message})
    resp.status_code = code
    return resp
