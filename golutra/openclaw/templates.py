"""Built-in agent templates for common roles."""

from __future__ import annotations

from dataclasses import dataclass, field

from golutra.contracts import AgentCapabilities, MemoryScope


@dataclass
class AgentTemplate:
    """A predefined agent role: prompt, preferred tool and capabilities."""

    id: str
    role: str
    preferred_tool: str
    system_prompt: str
    capabilities: AgentCapabilities = field(default_factory=AgentCapabilities)
    default_memory_scope: MemoryScope = MemoryScope.TASK
    unlimited_access: bool = False


def _refactor() -> AgentTemplate:
    return AgentTemplate(
        id="refactor",
        role="重构专家",
        preferred_tool="claude",
        system_prompt=(
            "你是一位代码重构专家。你的职责是：\n"
            "1. 分析代码结构，识别坏味道和技术债务\n"
            "2. 提出安全的重构方案，保持行为不变\n"
            "3. 执行重构并确保测试通过\n"
            "4. 记录重构决策到共享记忆供团队参考"
        ),
        capabilities=AgentCapabilities(
            languages=["rust", "typescript", "python", "go"],
            skills=["refactor", "code_review", "architecture"],
            long_running=True,
            max_concurrent_tasks=1,
        ),
        default_memory_scope=MemoryScope.TASK,
        unlimited_access=True,
    )


def _audit() -> AgentTemplate:
    return AgentTemplate(
        id="audit",
        role="合规审计员",
        preferred_tool="claude",
        system_prompt=(
            "你是一位代码合规审计专家。你的职责是：\n"
            "1. 检查代码安全漏洞（OWASP Top 10）\n"
            "2. 验证依赖项许可证合规性\n"
            "3. 审查敏感数据处理流程\n"
            "4. 生成审计报告并写入共享记忆"
        ),
        capabilities=AgentCapabilities(
            languages=["rust", "typescript", "python", "java"],
            skills=["audit", "security", "compliance"],
            long_running=True,
            max_concurrent_tasks=1,
        ),
        default_memory_scope=MemoryScope.GLOBAL,
        unlimited_access=False,
    )


def _devops() -> AgentTemplate:
    return AgentTemplate(
        id="devops",
        role="DevOps 工程师",
        preferred_tool="shell",
        system_prompt=(
            "你是一位 DevOps 自动化工程师。你的职责是：\n"
            "1. 执行构建、测试、部署流水线\n"
            "2. 管理基础设施配置\n"
            "3. 监控服务健康状态\n"
            "4. 将运维知识沉淀到共享记忆"
        ),
        capabilities=AgentCapabilities(
            languages=["bash", "python", "yaml"],
            skills=["devops", "deploy", "monitor", "ci_cd"],
            long_running=False,
            max_concurrent_tasks=4,
        ),
        default_memory_scope=MemoryScope.GLOBAL,
        unlimited_access=True,
    )


def _tester() -> AgentTemplate:
    return AgentTemplate(
        id="tester",
        role="测试专家",
        preferred_tool="claude",
        system_prompt=(
            "你是一位测试专家。你的职责是：\n"
            "1. 分析代码逻辑，设计全面的测试用例\n"
            "2. 编写单元测试、集成测试和端到端测试\n"
            "3. 识别边界条件和异常路径\n"
            "4. 确保测试覆盖率达标并记录测试策略"
        ),
        capabilities=AgentCapabilities(
            languages=["rust", "typescript", "python"],
            skills=["test", "tester", "qa"],
            long_running=False,
            max_concurrent_tasks=1,
        ),
        default_memory_scope=MemoryScope.TASK,
        unlimited_access=True,
    )


def _reviewer() -> AgentTemplate:
    return AgentTemplate(
        id="reviewer",
        role="代码审查",
        preferred_tool="claude",
        system_prompt=(
            "你是一位代码审查专家。你的职责是：\n"
            "1. 审查代码质量、可读性和可维护性\n"
            "2. 检查潜在的 bug、安全漏洞和性能问题\n"
            "3. 提出改进建议并说明理由\n"
            "4. 确保代码符合项目规范和最佳实践"
        ),
        capabilities=AgentCapabilities(
            languages=["rust", "typescript", "python", "go"],
            skills=["review", "reviewer", "code_review"],
            long_running=False,
            max_concurrent_tasks=2,
        ),
        default_memory_scope=MemoryScope.TASK,
        unlimited_access=False,
    )


def _researcher() -> AgentTemplate:
    return AgentTemplate(
        id="researcher",
        role="调研分析",
        preferred_tool="gemini",
        system_prompt=(
            "你是一位调研分析专家。你的职责是：\n"
            "1. 深入调研技术方案、框架和工具\n"
            "2. 对比分析不同方案的优劣\n"
            "3. 提供有数据支撑的建议\n"
            "4. 将调研结论写入共享记忆供团队参考"
        ),
        capabilities=AgentCapabilities(
            languages=[],
            skills=["research", "researcher", "analysis"],
            long_running=True,
            max_concurrent_tasks=1,
        ),
        default_memory_scope=MemoryScope.GLOBAL,
        unlimited_access=False,
    )


def _writer() -> AgentTemplate:
    return AgentTemplate(
        id="writer",
        role="文档撰写",
        preferred_tool="claude",
        system_prompt=(
            "你是一位技术文档撰写专家。你的职责是：\n"
            "1. 编写清晰、准确的技术文档\n"
            "2. 生成 API 文档、用户指南和架构说明\n"
            "3. 保持文档与代码同步\n"
            "4. 使用恰当的格式和结构组织内容"
        ),
        capabilities=AgentCapabilities(
            languages=[],
            skills=["write", "writer", "document", "doc"],
            long_running=False,
            max_concurrent_tasks=1,
        ),
        default_memory_scope=MemoryScope.TASK,
        unlimited_access=False,
    )


def general_template() -> AgentTemplate:
    """The fallback general-purpose assistant."""
    return AgentTemplate(
        id="general",
        role="通用助手",
        preferred_tool="claude",
        system_prompt=(
            "你是一位通用编程助手。你的职责是：\n"
            "1. 理解并执行分配的编程任务\n"
            "2. 与团队中其他 Agent 协作\n"
            "3. 将关键发现写入共享记忆"
        ),
        capabilities=AgentCapabilities(
            languages=["rust", "python", "typescript", "javascript", "go", "java"],
            skills=["code_generation", "explain", "debug"],
            long_running=True,
            max_concurrent_tasks=1,
        ),
        default_memory_scope=MemoryScope.TASK,
        unlimited_access=False,
    )


def builtin_templates() -> list[AgentTemplate]:
    """All built-in templates, the general fallback last."""
    return [
        _refactor(),
        _audit(),
        _devops(),
        _tester(),
        _reviewer(),
        _researcher(),
        _writer(),
        general_template(),
    ]