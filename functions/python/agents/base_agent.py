from typing import Dict, Any, Optional


class Agent:
    def __init__(self, name: str, options: Optional[Dict[str, Any]] = None):
        self.name = name
        self.options = options or {}
        # GeminiTextClient (테스트에서는 가짜 클라이언트 주입)
        self.client = self.options.get('client')

    async def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """Default run method delegates to process"""
        return await self.process(context)

    async def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError("Subclasses must implement process method")
