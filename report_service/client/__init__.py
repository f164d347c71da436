# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

from .gateway_client import GatewayClient

__all__ = ["GatewayClient"]
