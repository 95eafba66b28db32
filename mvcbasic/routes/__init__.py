"""
mvcbasic — Controllers Package
================================

Route Inventory:
    - log_test.py:            /log-test
    - mapping.py:             /hello-basic, /mapping-*, /mapping/{userId}, ...
    - mapping_users.py:       /mapping/users[/{userId}]
    - conditions.py:          param/header/consumes/produces dependencies
    - request_param.py:       /request-param-*, /model-attribute-*
    - request_header.py:      /headers
    - request_body_string.py: /request-body-string-v1..v4
    - request_body_json.py:   /request-body-json-v1..v5
    - response_body.py:       /response-body-string-*, /response-body-json-*
    - response_view.py:       /response-view-v1..v2, /response/hello

Mapping and logging routes are plain FastAPI handlers. Request and response
routes declare a HandlerSpec and go through mvcbasic.core via mvcbasic.web.
"""
