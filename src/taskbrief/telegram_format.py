"""Telegram message sending utilities."""

TELEGRAM_CHUNK_SIZE = 4000


async def send_text(bot_or_msg, text: str, *, chat_id: int | str | None = None):
    """Send plain text to Telegram in message-sized chunks.

    bot_or_msg: a Bot instance (pass chat_id) or an Update.message (calls reply_text).
    """
    chunks = [text[i : i + TELEGRAM_CHUNK_SIZE] for i in range(0, len(text), TELEGRAM_CHUNK_SIZE)]
    for chunk in chunks:
        if chat_id is not None:
            await bot_or_msg.send_message(chat_id=chat_id, text=chunk)
        else:
            await bot_or_msg.reply_text(chunk)
