"""Hypothesis profiles for the property-based suite."""
# 说明：注册 Hypothesis 运行档位；通过环境变量 DPAGG_HYPOTHESIS_PROFILE 切换（默认 dev）。
# 全局 autouse 的配置还原夹具是函数级的，对每个样例无副作用，故关闭对应健康检查。

import os

from hypothesis import HealthCheck, settings

settings.register_profile(
    "dev",
    max_examples=50,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.register_profile(
    "ci",
    max_examples=300,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture, HealthCheck.too_slow],
)
settings.load_profile(os.environ.get("DPAGG_HYPOTHESIS_PROFILE", "dev"))
