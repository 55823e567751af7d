"""
Chat transcript -> standalone embeddable chatbot module.

The generated module answers from the transcript first (the assistant reply
that follows the first user message containing the query) and falls back to
a handful of canned keyword replies. lookup_response() is the same lookup in
Python, so a widget can be previewed without a browser.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from hayagriva.core.fragments import CodeWriter, js_string
from hayagriva.core.protocol import ChatMessage

logger = logging.getLogger(__name__)

DEFAULT_WIDGET_NAME = "Hayagriva"
RESPONSE_DELAY_MS = 1000
WORD_SPLIT_RE = re.compile(r"[^a-z0-9]+")

Message = Union[ChatMessage, Mapping[str, str]]


@dataclass(frozen=True)
class CannedResponse:
    key: str
    words: Tuple[str, ...]
    reply: str
    phrases: Tuple[str, ...] = ()

    def matches(self, words: Sequence[str]) -> bool:
        if any(word in words for word in self.words):
            return True
        spaced = f" {' '.join(words)} "
        return any(f" {phrase} " in spaced for phrase in self.phrases)


# Checked in order; "{name}" is replaced with the bot name.
CANNED_RESPONSES: Tuple[CannedResponse, ...] = (
    CannedResponse("greeting", ("hello", "hi", "hey", "namaste"), "Namaste! How can I assist you today?"),
    CannedResponse(
        "thanks",
        ("thank", "thanks", "thx"),
        "You're very welcome! Is there anything else I can help you with?",
    ),
    CannedResponse(
        "identity",
        ("name",),
        "I am {name}, your AI assistant with an Indian perspective!",
        phrases=("who are you",),
    ),
    CannedResponse(
        "wellbeing",
        (),
        "I'm functioning well, thank you for asking! How may I help you?",
        phrases=("how are you",),
    ),
    CannedResponse(
        "farewell",
        ("bye", "goodbye"),
        "Namaste! It was a pleasure helping you. Have a wonderful day!",
    ),
)

FALLBACK_RESPONSE = "That's an interesting question. Would you like to explore this topic further?"
DEFAULT_GREETING = "Hello! I am {name}, your AI assistant. How can I help you today?"


def normalize_transcript(conversation_log: Sequence[Message]) -> List[ChatMessage]:
    return [m if isinstance(m, ChatMessage) else ChatMessage.model_validate(dict(m)) for m in conversation_log]


def tokenize(text: str) -> List[str]:
    return [word for word in WORD_SPLIT_RE.split(text.lower()) if word]


def lookup_response(
    transcript: Sequence[Message],
    message: str,
    name: str = DEFAULT_WIDGET_NAME,
) -> str:
    """The reply the generated widget gives to `message`."""
    messages = normalize_transcript(transcript)
    query = message.strip().lower()
    if query:
        for i, entry in enumerate(messages[:-1]):
            if (
                entry.role == "user"
                and query in entry.content.lower()
                and messages[i + 1].role == "assistant"
            ):
                return messages[i + 1].content

    words = tokenize(query)
    for canned in CANNED_RESPONSES:
        if canned.matches(words):
            return canned.reply.replace("{name}", name)
    return FALLBACK_RESPONSE


def widget_class_name(name: str) -> str:
    """"hayagriva" -> "HayagrivaBot"; names without letters fall back to the default."""
    words = re.findall(r"[A-Za-z0-9]+", name)
    stem = "".join(w[0].upper() + w[1:] for w in words)
    if not stem or not stem[0].isalpha():
        stem = DEFAULT_WIDGET_NAME
    return f"{stem}Bot"


# -- JS emission -----------------------------------------------------

WIDGET_CSS = (
    (".hayagriva-chat", {
        "display": "flex",
        "flex-direction": "column",
        "height": "400px",
        "border": "1px solid #e2e8f0",
        "border-radius": "8px",
        "overflow": "hidden",
        "font-family": "-apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif",
    }),
    (".hayagriva-header", {
        "display": "flex",
        "justify-content": "space-between",
        "align-items": "center",
        "padding": "8px 16px",
        "background-color": "#f8fafc",
        "border-bottom": "1px solid #e2e8f0",
    }),
    (".hayagriva-header h3", {"margin": "0", "font-size": "16px"}),
    (".hayagriva-close-btn", {"background": "none", "border": "none", "cursor": "pointer", "font-size": "18px"}),
    (".hayagriva-messages", {
        "flex": "1",
        "padding": "16px",
        "overflow-y": "auto",
        "display": "flex",
        "flex-direction": "column",
        "gap": "16px",
    }),
    (".hayagriva-message", {"max-width": "80%", "padding": "10px 14px", "border-radius": "18px", "line-height": "1.4"}),
    (".hayagriva-user-message", {"align-self": "flex-end", "background-color": "#3b82f6", "color": "white"}),
    (".hayagriva-assistant-message", {"align-self": "flex-start", "background-color": "#f1f5f9", "color": "#475569"}),
    (".hayagriva-input-area", {"display": "flex", "gap": "8px", "padding": "12px", "border-top": "1px solid #e2e8f0"}),
    (".hayagriva-input", {
        "flex": "1",
        "padding": "8px 12px",
        "border": "1px solid #e2e8f0",
        "border-radius": "20px",
        "outline": "none",
    }),
    (".hayagriva-send-btn, .hayagriva-voice-btn", {
        "background-color": "#3b82f6",
        "color": "white",
        "border": "none",
        "border-radius": "18px",
        "padding": "0 12px",
        "height": "36px",
        "cursor": "pointer",
    }),
)


def _write_const(w: CodeWriter, name: str, value: object) -> None:
    lines = json.dumps(value, indent=2).split("\n")
    lines[0] = f"const {name} = {lines[0]}"
    lines[-1] += ";"
    w.lines(lines)


def _write_data(w: CodeWriter, messages: Sequence[ChatMessage], name: str) -> None:
    _write_const(w, "TRAINING_DATA", [{"role": m.role, "content": m.content} for m in messages])
    w.blank()
    _write_const(
        w,
        "CANNED_RESPONSES",
        [{"words": list(c.words), "phrases": list(c.phrases), "reply": c.reply} for c in CANNED_RESPONSES],
    )
    w.blank()
    w.line(f"const FALLBACK_RESPONSE = {json.dumps(FALLBACK_RESPONSE)};")
    w.line(f"const DEFAULT_GREETING = {json.dumps(DEFAULT_GREETING)};")
    w.line(f"const DEFAULT_NAME = {js_string(name)};")


def _write_constructor(w: CodeWriter) -> None:
    with w.block("constructor(options = {}) {", "}"):
        w.line("this.name = options.name || DEFAULT_NAME;")
        w.line("this.trainingData = TRAINING_DATA;")
        w.line("this.voiceEnabled = options.voiceEnabled !== false;")
        w.line("this.containerElement = null;")
        w.line("this.onReady = options.onReady || (() => {});")
        w.line("this.onMessageSent = options.onMessageSent || (() => {});")
        w.line("this.onMessageReceived = options.onMessageReceived || (() => {});")


def _write_mount(w: CodeWriter) -> None:
    w.lines([
        "/**",
        " * Render the chat interface into a DOM element or CSS selector.",
        " * @returns {this}",
        " */",
    ])
    with w.block("mount(container) {", "}"):
        w.line("this.containerElement = typeof container === 'string' ? document.querySelector(container) : container;")
        with w.block("if (!this.containerElement) {", "}"):
            w.line("console.error('Could not find container element');")
            w.line("return this;")
        w.line("this._createChatInterface();")
        w.line("this.onReady(this);")
        w.line("return this;")


def _write_send_message(w: CodeWriter) -> None:
    w.lines([
        "/**",
        " * Send a message and resolve with the reply.",
        " * @returns {Promise<string>}",
        " */",
    ])
    with w.block("sendMessage(message) {", "}"):
        with w.block("return new Promise((resolve) => {", "});"):
            w.line("this._addMessageToChat('user', message);")
            w.line("this.onMessageSent(message);")
            with w.block("setTimeout(() => {", f"}}, {RESPONSE_DELAY_MS});"):
                w.line("const response = this._generateResponse(message);")
                w.line("this._addMessageToChat('assistant', response);")
                w.line("this.onMessageReceived(response);")
                with w.block("if (this.voiceEnabled) {", "}"):
                    w.line("this._speakText(response);")
                w.line("resolve(response);")


def _write_voice(w: CodeWriter) -> None:
    w.lines([
        "/**",
        " * Listen for one spoken message. Rejects when the host has no speech recognition.",
        " * @returns {Promise<string>}",
        " */",
    ])
    with w.block("startVoiceRecognition() {", "}"):
        w.line("const SpeechRecognition = typeof window !== 'undefined'")
        w.line("  ? window.SpeechRecognition || window.webkitSpeechRecognition")
        w.line("  : undefined;")
        with w.block("if (!SpeechRecognition) {", "}"):
            w.line("return Promise.reject(new Error('Speech recognition not supported'));")
        with w.block("return new Promise((resolve) => {", "});"):
            w.line("const recognition = new SpeechRecognition();")
            w.line("recognition.lang = 'en-US';")
            w.line("recognition.interimResults = false;")
            w.line("recognition.maxAlternatives = 1;")
            with w.block("recognition.onresult = (event) => {", "};"):
                w.line("const transcript = event.results[0][0].transcript;")
                w.line("this.sendMessage(transcript);")
                w.line("resolve(transcript);")
            with w.block("recognition.onerror = (event) => {", "};"):
                w.line("console.error('Speech recognition error', event.error);")
                w.line("resolve('');")
            w.line("recognition.start();")
    w.blank()
    with w.block("setVoiceEnabled(enabled) {", "}"):
        w.line("this.voiceEnabled = Boolean(enabled);")


def _write_interface(w: CodeWriter) -> None:
    with w.block("_createChatInterface() {", "}"):
        w.line("this.containerElement.innerHTML = `")
        markup = CodeWriter(depth=1)
        with markup.block('<div class="hayagriva-chat">', "</div>"):
            with markup.block('<div class="hayagriva-header">', "</div>"):
                markup.line("<h3>${this.name} Assistant</h3>")
                markup.line('<button class="hayagriva-close-btn" aria-label="Close chat">&times;</button>')
            markup.line('<div class="hayagriva-messages" aria-live="polite"></div>')
            with markup.block('<div class="hayagriva-input-area">', "</div>"):
                markup.line('<input type="text" class="hayagriva-input" placeholder="Type a message..." />')
                markup.line('<button class="hayagriva-send-btn">Send</button>')
                markup.line('<button class="hayagriva-voice-btn" aria-label="Speak">&#127908;</button>')
        with markup.block("<style>", "</style>"):
            for selector, declarations in WIDGET_CSS:
                markup.rule(selector, declarations)
        w.extend(markup)
        w.line("`;")
        w.blank()
        w.line("const inputField = this.containerElement.querySelector('.hayagriva-input');")
        w.line("const sendButton = this.containerElement.querySelector('.hayagriva-send-btn');")
        w.line("const voiceButton = this.containerElement.querySelector('.hayagriva-voice-btn');")
        w.line("const closeButton = this.containerElement.querySelector('.hayagriva-close-btn');")
        w.blank()
        w.line("const opener = this.trainingData.find((entry) => entry.role === 'assistant');")
        w.line("this._addMessageToChat('assistant', opener ? opener.content : DEFAULT_GREETING.replace('{name}', this.name));")
        w.blank()
        with w.block("const submit = () => {", "};"):
            with w.block("if (inputField.value.trim()) {", "}"):
                w.line("this.sendMessage(inputField.value);")
                w.line("inputField.value = '';")
        w.line("sendButton.addEventListener('click', submit);")
        with w.block("inputField.addEventListener('keypress', (event) => {", "});"):
            with w.block("if (event.key === 'Enter') {", "}"):
                w.line("submit();")
        with w.block("voiceButton.addEventListener('click', () => {", "});"):
            w.line("this.startVoiceRecognition().catch((error) => console.error(error.message));")
        with w.block("closeButton.addEventListener('click', () => {", "});"):
            w.line("this.containerElement.innerHTML = '';")


def _write_helpers(w: CodeWriter) -> None:
    with w.block("_addMessageToChat(role, content) {", "}"):
        w.line("if (!this.containerElement) return;")
        w.line("const messagesDiv = this.containerElement.querySelector('.hayagriva-messages');")
        w.line("if (!messagesDiv) return;")
        w.line("const messageDiv = document.createElement('div');")
        w.line("messageDiv.classList.add('hayagriva-message');")
        w.line("messageDiv.classList.add(role === 'user' ? 'hayagriva-user-message' : 'hayagriva-assistant-message');")
        w.line("messageDiv.textContent = content;")
        w.line("messagesDiv.appendChild(messageDiv);")
        w.line("messagesDiv.scrollTop = messagesDiv.scrollHeight;")
    w.blank()
    with w.block("_generateResponse(message) {", "}"):
        w.line("const query = String(message).trim().toLowerCase();")
        with w.block("if (query) {", "}"):
            with w.block("const index = this.trainingData.findIndex((entry, i) => (", "));"):
                w.line("entry.role === 'user'")
                w.line("&& entry.content.toLowerCase().includes(query)")
                w.line("&& Boolean(this.trainingData[i + 1])")
                w.line("&& this.trainingData[i + 1].role === 'assistant'")
            w.line("if (index !== -1) return this.trainingData[index + 1].content;")
        w.blank()
        w.line("const words = query.split(/[^a-z0-9]+/).filter(Boolean);")
        w.line("const spaced = ` ${words.join(' ')} `;")
        with w.block("const canned = CANNED_RESPONSES.find((rule) => (", "));"):
            w.line("rule.words.some((word) => words.includes(word))")
            w.line("|| rule.phrases.some((phrase) => spaced.includes(` ${phrase} `))")
        w.line("return canned ? canned.reply.replace('{name}', this.name) : FALLBACK_RESPONSE;")
    w.blank()
    with w.block("_speakText(text) {", "}"):
        w.line("if (typeof window === 'undefined' || !('speechSynthesis' in window)) return;")
        w.line("window.speechSynthesis.cancel();")
        w.line("const utterance = new SpeechSynthesisUtterance(text);")
        w.line("const voices = window.speechSynthesis.getVoices();")
        w.line("const voice = voices.find((v) => v.lang === 'en-IN' || v.name.includes('Indian') || v.name.includes('Hindi'));")
        w.line("if (voice) utterance.voice = voice;")
        w.line("window.speechSynthesis.speak(utterance);")


def synthesize_embeddable_widget(
    conversation_log: Sequence[Message],
    *,
    name: str = DEFAULT_WIDGET_NAME,
    generated_at: Optional[datetime] = None,
) -> str:
    """
    Package a transcript into a self-contained chatbot module.

    The output depends only on the arguments; no timestamp is written unless
    `generated_at` is given.
    """
    messages = normalize_transcript(conversation_log)
    name = name.strip() or DEFAULT_WIDGET_NAME
    class_name = widget_class_name(name)

    w = CodeWriter()
    w.line("/**")
    w.line(f" * {name.replace('*/', '* /')} chatbot")
    if generated_at is not None:
        w.line(f" * Generated on: {generated_at.isoformat()}")
    w.line(" *")
    w.line(" * Standalone chat widget answering from a recorded conversation.")
    w.line(f" * Usage: new {class_name}().mount('#chat-container');")
    w.line(" */")
    w.blank()
    _write_data(w, messages, name)
    w.blank()
    with w.block(f"class {class_name} {{", "}"):
        _write_constructor(w)
        w.blank()
        _write_mount(w)
        w.blank()
        _write_send_message(w)
        w.blank()
        _write_voice(w)
        w.blank()
        _write_interface(w)
        w.blank()
        _write_helpers(w)
    w.blank()
    with w.block("if (typeof module !== 'undefined' && module.exports) {", "}"):
        w.line(f"module.exports = {class_name};")
    with w.block("if (typeof window !== 'undefined') {", "}"):
        w.line(f"window.{class_name} = {class_name};")

    logger.debug("Packaged %d transcript messages into %s", len(messages), class_name)
    return w.render() + "\n"
