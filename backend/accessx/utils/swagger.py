"""Swagger/OpenAPI configuration for the application."""

SWAGGER_URL = '/api/docs'
API_URL = '/api/swagger.json'

def _json_body(required, properties):
    return {
        "required": True,
        "content": {
            "application/json": {
                "schema": {
                    "type": "object",
                    "required": required,
                    "properties": properties
                }
            }
        }
    }

def _ref(name, description):
    return {
        "description": description,
        "content": {
            "application/json": {
                "schema": {"$ref": f"#/components/schemas/{name}"}
            }
        }
    }

def generate_swagger_spec():
    """Generate OpenAPI/Swagger specification."""
    return {
        "openapi": "3.0.0",
        "info": {
            "title": "AccessX Attendance API",
            "description": "QR session attendance with wallet-signed proofs",
            "version": "1.0.0"
        },
        "components": {
            "securitySchemes": {
                "bearerAuth": {
                    "type": "http",
                    "scheme": "bearer",
                    "bearerFormat": "JWT"
                }
            },
            "schemas": {
                "Session": {
                    "type": "object",
                    "properties": {
                        "sessionId": {"type": "string", "format": "uuid"},
                        "nonce": {"type": "string"},
                        "title": {"type": "string"},
                        "date": {"type": "string", "format": "date"},
                        "startTime": {"type": "string", "nullable": True},
                        "endTime": {"type": "string", "nullable": True},
                        "instructorWallet": {"type": "string", "nullable": True},
                        "createdAt": {"type": "string", "format": "date-time"}
                    }
                },
                "RedeemResult": {
                    "type": "object",
                    "properties": {
                        "success": {"type": "boolean"},
                        "tokenId": {"type": "string", "pattern": "^[0-9]{6}$"},
                        "txHash": {"type": "string"}
                    }
                },
                "Validation": {
                    "type": "object",
                    "properties": {
                        "verified": {"type": "boolean"},
                        "tokenId": {"type": "string"},
                        "metadata": {"type": "object"},
                        "error": {"type": "string"}
                    }
                },
                "Error": {
                    "type": "object",
                    "properties": {
                        "error": {"type": "boolean"},
                        "message": {"type": "string"},
                        "status_code": {"type": "integer"},
                        "code": {"type": "string"}
                    }
                }
            }
        },
        "paths": {
            "/admin/session": {
                "post": {
                    "tags": ["Sessions"],
                    "summary": "Create attendance session",
                    "requestBody": _json_body(["title", "date"], {
                        "title": {"type": "string"},
                        "date": {"type": "string", "format": "date"},
                        "startTime": {"type": "string", "example": "09:00"},
                        "endTime": {"type": "string", "example": "10:00"},
                        "latitude": {"type": "number"},
                        "longitude": {"type": "number"}
                    }),
                    "responses": {
                        "200": _ref("Session", "Session created"),
                        "400": _ref("Error", "Missing fields")
                    }
                }
            },
            "/admin/sessions": {
                "get": {
                    "tags": ["Sessions"],
                    "summary": "List sessions",
                    "responses": {"200": {"description": "Array of sessions"}}
                }
            },
            "/student/redeem": {
                "post": {
                    "tags": ["Attendance"],
                    "summary": "Redeem a signed attendance request",
                    "requestBody": _json_body(
                        ["email", "sessionId", "nonce", "signature", "walletAddress"],
                        {
                            "email": {"type": "string"},
                            "sessionId": {"type": "string"},
                            "nonce": {"type": "string"},
                            "signature": {"type": "string"},
                            "walletAddress": {"type": "string"},
                            "studentImage": {"type": "string"},
                            "latitude": {"type": "number"},
                            "longitude": {"type": "number"}
                        }
                    ),
                    "responses": {
                        "200": _ref("RedeemResult", "Attendance recorded"),
                        "400": _ref("Error", "Missing fields"),
                        "401": _ref("Error", "Nonce or signature mismatch"),
                        "403": _ref("Error", "Outside the attendance window or range"),
                        "404": _ref("Error", "Unknown session"),
                        "409": _ref("Error", "Duplicate attendance"),
                        "500": _ref("Error", "Crypto failure")
                    }
                }
            },
            "/validator/{sessionId}/{walletAddress}": {
                "get": {
                    "tags": ["Validator"],
                    "summary": "Verify attendance",
                    "parameters": [
                        {"name": "sessionId", "in": "path", "required": True, "schema": {"type": "string"}},
                        {"name": "walletAddress", "in": "path", "required": True, "schema": {"type": "string"}}
                    ],
                    "responses": {
                        "200": _ref("Validation", "Attendance verified"),
                        "404": _ref("Validation", "No record")
                    }
                }
            }
        },
        "tags": [
            {"name": "Sessions", "description": "Session issuance"},
            {"name": "Attendance", "description": "Attendance redemption"},
            {"name": "Validator", "description": "Attendance verification"}
        ]
    }
