"""Client Basics

Single questions, system prompts, gateway session tracking, multi-turn
chat and vision, all through OpenAIClient.

Demonstrates: OpenAIClient.ask(), ask_with_image(), chat(),
              session/account headers, InferenceResponse accessors,
              response.pprint()
"""

import logging

from dotenv import load_dotenv

from agentloop import Message, OpenAIClient

load_dotenv()
logging.basicConfig(level=logging.INFO)


def main():
    # --- Simple questions ---
    # OpenAIClient reads AGENTLOOP_API_KEY / AGENTLOOP_BASE_URL from the env.

    print("=== ask() ===\n")

    with OpenAIClient(default_model="gpt-4o-mini") as client:
        print(client.ask("What is 2 + 2?"))
        print(client.ask("Tell me a joke", system_prompt="You are a comedian"))
        print()

    # --- Session and account tracking ---
    # These become gateway headers; the client never interprets them.

    with OpenAIClient(
        session_id="conv_123",
        session_name="Customer Support Chat",
        account_id="user_456",
        account_name="Acme Corp",
    ) as client:
        print(client.ask("Help me with my order"))

        # --- Multi-turn conversation ---

        print("\n=== Multi-turn ===\n")

        messages = [
            Message.system("You are a helpful assistant"),
            Message.user("My name is Alice"),
        ]
        response = client.chat(messages)
        print(response.content)

        messages.append(response.to_message())
        messages.append(Message.user("What's my name?"))
        response = client.chat(messages)
        response.pprint()

        print(f"  model={response.model}, finish={response.finish_reason}")
        print(f"  tokens={response.prompt_tokens}+{response.completion_tokens}")

        # --- Vision ---

        print("\n=== Vision ===\n")

        print(client.ask_with_image(
            "What's in this image?",
            "https://upload.wikimedia.org/wikipedia/commons/3/3a/Cat03.jpg",
            detail="high",
        ))


if __name__ == "__main__":
    main()
