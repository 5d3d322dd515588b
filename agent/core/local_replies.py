"""Canned replies used when no model is reachable.

``FILLER_REPLIES`` backs the degraded path of ``/api/chat``. ``local_reply``
is the keyword responder served by ``/api/chat/local``.
"""

from __future__ import annotations

import random
from typing import Optional, Sequence, Tuple


MOCK_MODEL = "mock-service"
MOCK_NOTE = "Using mock response while configuring AI models"
LOCAL_MODEL = "local-responder"

FILLER_REPLIES: Tuple[str, ...] = (
    "Hello! I'm SID AI Assistant. Currently testing different AI models.",
    "Hi there! I'm SID, your AI companion. We're configuring the backend right now.",
    "Greetings! I'm SID. The AI service is being optimized for better performance.",
)

# First matching rule wins.
KEYWORD_REPLIES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (
        ("hello", "hi", "hola"),
        "¡Hola! 👋 I'm SID, your Smart Intelligent Assistant! I'm here to help you with "
        "anything - from answering questions to creative brainstorming. What's on your mind today?",
    ),
    (
        ("how are you",),
        "I'm fantastic! 🤖✨ Ready to dive into some interesting conversations. How about you?",
    ),
    (
        ("what can you do", "help"),
        "I'm your versatile AI companion! 🌟 I can:\n• Answer questions on any topic\n"
        "• Help with creative projects\n• Discuss technology & science\n• Assist with learning\n"
        "• Or just chat about life!\nWhat would you like to explore?",
    ),
    (
        ("thank",),
        "You're very welcome! 😊 I'm always happy to help. Is there anything else you're curious about?",
    ),
    (
        ("name",),
        "I'm SID - which stands for Smart Intelligent Assistant! 🤖 I'm designed to be helpful, "
        "knowledgeable, and always ready for a good conversation.",
    ),
    (
        ("weather",),
        "🌤️ I don't have real-time weather data, but I'd love to discuss climate science, seasons, "
        "or environmental topics! What interests you about weather?",
    ),
    (
        ("love", "like"),
        "That's wonderful! ❤️ I think curiosity and passion are what make conversations truly "
        "special. Tell me more about what you enjoy!",
    ),
    (
        ("joke", "funny"),
        "Why don't scientists trust atoms? \n\nBecause they make up everything! 😄 \n\n"
        "Want to hear another one?",
    ),
    (
        ("bye", "goodbye"),
        "Goodbye! 👋 It was great chatting with you! Come back anytime you want to talk - "
        "I'm always here! 🌟",
    ),
)

GENERIC_REPLIES: Tuple[str, ...] = (
    "That's fascinating! 🧠 I'd love to explore this topic with you. What specific aspect are you most curious about?",
    "Great question! 💫 This really makes me think. Let me share some perspectives on that...",
    "Interesting point! 🌈 I appreciate you bringing this up. Here's what I know about that topic...",
    "Thanks for sharing that! 🚀 I have some thoughts I'd like to discuss with you...",
    "That's a brilliant observation! 💡 Let me provide some insights based on what I understand...",
    "I love this conversation! 🤝 You've raised a really thoughtful point. Here's my take on it...",
    "That's an excellent question! 🌟 Let me break down what I know about this subject...",
    "Interesting! I've been learning about that too. Here's what I can share... 📚",
)


def pick_filler(
    rng: Optional[random.Random] = None, choices: Sequence[str] = FILLER_REPLIES
) -> str:
    return (rng or random).choice(list(choices))


def local_reply(message: str, rng: Optional[random.Random] = None) -> str:
    lowered = message.lower()
    for keywords, reply in KEYWORD_REPLIES:
        if any(keyword in lowered for keyword in keywords):
            return reply
    return (rng or random).choice(list(GENERIC_REPLIES))
